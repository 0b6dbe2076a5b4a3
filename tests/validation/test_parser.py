"""Tests for rule parsing and the builder context."""

from __future__ import annotations

import pytest

from fieldtag.errors import RuleBuildError
from fieldtag.validation.builder import Builder
from fieldtag.validation.context import Context
from fieldtag.validation.parser import RuleParser, translate


class TestTranslate:
    def test_operators(self) -> None:
        assert translate("a&&b||!c").split() == ["a", "and", "b", "or", "not", "c"]

    def test_string_literals_untouched(self) -> None:
        assert translate('oneof("&&", \'||\')') == 'oneof("&&", \'||\')'

    def test_not_equal_untouched(self) -> None:
        assert translate("a != b") == "a != b"


class TestRuleParser:
    def test_syntax_error(self) -> None:
        with pytest.raises(RuleBuildError, match="invalid rule"):
            RuleParser().parse("min(")

    @pytest.mark.parametrize(
        ("rule", "expected"),
        [
            ("zero", "zero"),
            ("zero()", "zero"),
            ("min(3)", "min(3)"),
            ("min == 3", "min(3)"),
            ("3 == min", "min(3)"),
            ("min(1.5)", "min(1.5)"),
            ("min(-1)", "min(-1)"),
            ("min(1) && max(3)", "(min(1) && max(3))"),
            ("zero || min(3)", "(zero || min(3))"),
            ("zero || (min==3 && max==10)", "(zero || (min(3) && max(10)))"),
            ("ranger(1, 5)", "ranger(1, 5)"),
            ('oneof("a", "b")', 'oneof("a","b")'),
            ("array(min(1), max(3))", "array(min(1) && max(3))"),
            ("array(zero || min(1))", "array(zero || min(1))"),
            ("mapv(required)", "mapv(required)"),
            ("time(datelayout)", 'time("%Y-%m-%d")'),
        ],
    )
    def test_builds(self, builder: Builder, rule: str, expected: str) -> None:
        assert str(builder.build_validator(rule)) == expected

    @pytest.mark.parametrize(
        ("rule", "message"),
        [
            ("nope", "nope is not defined"),
            ("min(nope)", "nope is not defined"),
            ("min", "min must have and only have one argument"),
            ("min(1, 2)", "min must have and only have one argument"),
            ('min("a")', "min does not support the argument type str"),
            ("zero(1)", "zero must not have any arguments"),
            ("!zero", "NOT validation rule is not supported"),
            ("min != 3", "only the == comparison is supported"),
            ("min < 3", "only the == comparison is supported"),
            ("datelayout", "datelayout is not a function"),
            ("datelayout == 1", "left or right is not a function"),
            ("min(x=1)", "keyword arguments are not supported"),
            ("array()", "array validator has no arguments"),
            ("array(1)", "array expects 0th argument is a validator, but got int"),
            ("exp(1, 0, 2)", "the exp base must not be less than 2"),
            ('exp("2", 0, 3)', "exp expects 0th argument is an int, but got str"),
            ("exp(2.0, 0, 3)", "exp expects 0th argument is an int, but got float"),
            ('ranger(1, "a")', "ranger expects 1th argument is an int or float, but got str"),
            ("min(True)", "min does not support the argument type bool"),
            ("[1]", "unsupported expression"),
        ],
    )
    def test_build_errors(self, builder: Builder, rule: str, message: str) -> None:
        with pytest.raises(RuleBuildError, match=message.replace("(", r"\(").replace(")", r"\)")):
            builder.build_validator(rule)


class TestContext:
    def test_empty_context_has_no_validator(self) -> None:
        with pytest.raises(RuleBuildError):
            Context().validator()

    def test_empty_sub_context_is_skipped(self) -> None:
        ctx = Context()
        ctx.and_(ctx.new())
        ctx.or_(ctx.new())
        assert ctx.validators == []

    def test_build_into_context(self, builder: Builder) -> None:
        ctx = Context()
        builder.build(ctx, "min(1)")
        builder.build(ctx, "max(2)")
        assert [str(v) for v in ctx.validators] == ["min(1)", "max(2)"]
        assert str(ctx.validator()) == "(min(1) && max(2))"

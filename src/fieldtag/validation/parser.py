"""Rule expression parser.

Turns a rule such as ``zero || (min == 3 && max(10))`` into calls on a
builder :class:`~fieldtag.validation.context.Context`. The grammar is
parsed with the standard-library :mod:`ast` module after rewriting the
C-style operators ``&&``, ``||`` and ``!`` (outside string literals) to
``and``, ``or`` and ``not``.

Accepted forms:

- ``a && b``, ``a || b``, parentheses;
- ``name(arg, ...)`` with int, float or string literals, symbols, and
  nested rules (``array(min(1))``) as arguments;
- a bare ``name``, equivalent to ``name()``;
- ``name == value`` (or ``value == name``), equivalent to ``name(value)``.

Name resolution and the meaning of ``==`` are delegated to a resolver
(normally the :class:`~fieldtag.validation.builder.Builder`).
"""

from __future__ import annotations

import ast
import re
from typing import Any, Protocol

from fieldtag.errors import RuleBuildError
from fieldtag.validation.context import Context
from fieldtag.validation.functions import Function

_TOKENS = re.compile(r""""(?:\\.|[^"\\])*"|'(?:\\.|[^'\\])*'|&&|\|\||!(?!=)""")
_KEYWORDS = {"&&": " and ", "||": " or ", "!": " not "}


class IdentifierResolver(Protocol):
    """Callbacks the parser needs from its owner."""

    def get_identifier(self, name: str) -> Any: ...

    def eq(self, ctx: Context, left: Any, right: Any) -> None: ...


def translate(rule: str) -> str:
    """Rewrite C-style boolean operators to Python keywords.

    Examples:
        >>> translate('zero || (min==3 && max==10)')
        'zero  or  (min==3  and  max==10)'
        >>> translate('oneof("a&&b")')
        'oneof("a&&b")'
    """
    return _TOKENS.sub(lambda m: _KEYWORDS.get(m.group(0), m.group(0)), rule)


class _SubRule:
    """A nested expression passed as a function argument."""

    def __init__(self, compiler: _Compiler, node: ast.expr) -> None:
        self._compiler = compiler
        self._node = node

    def build(self, ctx: Context) -> None:
        self._compiler.build(ctx, self._node)

    def __repr__(self) -> str:
        return f"<rule {ast.unparse(self._node)}>"


class _Compiler:
    def __init__(self, resolver: IdentifierResolver, rule: str) -> None:
        self.resolver = resolver
        self.rule = rule

    def error(self, reason: str) -> RuleBuildError:
        return RuleBuildError(f"invalid rule '{self.rule}': {reason}")

    def build(self, ctx: Context, node: ast.expr) -> None:
        if isinstance(node, ast.BoolOp):
            nc = ctx.new()
            if isinstance(node.op, ast.And):
                for value in node.values:
                    self.build(nc, value)
                ctx.and_(nc)
            else:
                for value in node.values:
                    sub = nc.new()
                    self.build(sub, value)
                    nc.and_(sub)
                ctx.or_(nc)

        elif isinstance(node, ast.UnaryOp) and isinstance(node.op, ast.Not):
            nc = ctx.new()
            self.build(nc, node.operand)
            ctx.not_(nc)

        elif isinstance(node, ast.Call):
            if node.keywords:
                raise self.error("keyword arguments are not supported")
            function = self.function(node.func)
            function.call(ctx, *(self.argument(arg) for arg in node.args))

        elif isinstance(node, ast.Name):
            value = self.resolver.get_identifier(node.id)
            if not isinstance(value, Function):
                raise self.error(f"{node.id} is not a function")
            value.call(ctx)

        elif isinstance(node, ast.Compare):
            if len(node.ops) != 1 or not isinstance(node.ops[0], ast.Eq):
                raise self.error("only the == comparison is supported")
            left = self.operand(node.left)
            right = self.operand(node.comparators[0])
            self.resolver.eq(ctx, left, right)

        else:
            raise self.error(f"unsupported expression '{ast.unparse(node)}'")

    def function(self, node: ast.expr) -> Function:
        if not isinstance(node, ast.Name):
            raise self.error(f"unsupported call target '{ast.unparse(node)}'")
        value = self.resolver.get_identifier(node.id)
        if not isinstance(value, Function):
            raise self.error(f"{node.id} is not a function")
        return value

    def literal(self, node: ast.expr) -> Any:
        if isinstance(node, ast.Constant) and isinstance(node.value, (int, float, str)):
            return node.value
        if (
            isinstance(node, ast.UnaryOp)
            and isinstance(node.op, (ast.USub, ast.UAdd))
            and isinstance(node.operand, ast.Constant)
            and isinstance(node.operand.value, (int, float))
            and not isinstance(node.operand.value, bool)
        ):
            value = node.operand.value
            return -value if isinstance(node.op, ast.USub) else value
        raise self.error(f"unsupported literal '{ast.unparse(node)}'")

    def operand(self, node: ast.expr) -> Any:
        """Operand of ``==``: an identifier's value or a literal."""
        if isinstance(node, ast.Name):
            return self.resolver.get_identifier(node.id)
        return self.literal(node)

    def argument(self, node: ast.expr) -> Any:
        """Call argument: a literal, a symbol, or a nested rule."""
        if isinstance(node, ast.Name):
            value = self.resolver.get_identifier(node.id)
            return _SubRule(self, node) if isinstance(value, Function) else value
        if isinstance(node, (ast.Call, ast.BoolOp, ast.Compare)):
            return _SubRule(self, node)
        return self.literal(node)


class RuleParser:
    """Parses rule strings and drives a builder context through them."""

    def parse(self, rule: str) -> ast.expr:
        """Return the expression tree of *rule*.

        Raises:
            RuleBuildError: *rule* is not a valid expression.
        """
        try:
            tree = ast.parse(translate(rule).strip(), mode="eval")
        except SyntaxError as exc:
            raise RuleBuildError(f"invalid rule '{rule}': {exc.msg}") from exc
        return tree.body

    def build(self, resolver: IdentifierResolver, ctx: Context, rule: str) -> None:
        """Parse *rule* and build its validators into *ctx*."""
        _Compiler(resolver, rule).build(ctx, self.parse(rule))

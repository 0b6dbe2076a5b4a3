"""Tests for the primitive validators."""

from __future__ import annotations

import datetime as dt
import ipaddress
from typing import Any

import pytest

from fieldtag.errors import ComparisonError, RuleBuildError, ValidationError
from fieldtag.validation.validators import (
    addr,
    cidr,
    duration,
    exp,
    ip,
    is_integer,
    is_number,
    mac,
    max_,
    min_,
    one_of,
    ranger,
    required,
    time_layout,
    zero,
)
from fieldtag.validation.validators.net import split_host_port
from fieldtag.validation.validators.structfield import compare


class TestZero:
    @pytest.mark.parametrize("value", [None, 0, 0.0, "", [], {}, False])
    def test_zero_values(self, value: Any) -> None:
        zero().validate(None, value)
        with pytest.raises(ValidationError, match="the value cannot be empty"):
            required().validate(None, value)

    @pytest.mark.parametrize("value", [1, "a", [0], True])
    def test_non_zero_values(self, value: Any) -> None:
        required().validate(None, value)
        with pytest.raises(ValidationError, match="the value should be empty"):
            zero().validate(None, value)


class TestRanges:
    def test_descriptions(self) -> None:
        assert str(min_(3.0)) == "min(3)"
        assert str(max_(2.5)) == "max(2.5)"
        assert str(ranger(1, 2)) == "ranger(1, 2)"
        assert str(exp(10, 1, 3)) == "exp(10,1,3)"

    def test_fractional_bound_truncated_for_lengths(self) -> None:
        min_(2.5).validate(None, "ab")
        min_(2.5).validate(None, [1, 2])
        max_(1.5).validate(None, "a")
        with pytest.raises(ValidationError, match="the string length is greater than 1.5"):
            max_(1.5).validate(None, "ab")

    def test_fractional_bound_kept_for_numbers(self) -> None:
        with pytest.raises(ValidationError, match="the integer is less than 2.5"):
            min_(2.5).validate(None, 2)
        with pytest.raises(ValidationError, match="the float is greater than 1.5"):
            max_(1.5).validate(None, 1.75)

    def test_ranger_bounds_inclusive(self) -> None:
        v = ranger(1, 3)
        for value in (1, 2, 3, "abc", [1]):
            v.validate(None, value)
        with pytest.raises(ValidationError, match=r"the integer is not in range \[1, 3\]"):
            v.validate(None, 0)
        with pytest.raises(ValidationError, match="the string length is not in range"):
            v.validate(None, "abcd")

    @pytest.mark.parametrize(
        ("args", "message"),
        [
            ((1, 0, 2), "base must not be less than 2"),
            ((37, 0, 2), "base must not be greater than 36"),
            ((2, -1, 2), "start must not be less than 0"),
            ((2, 2, 2), "end must be greater than start"),
        ],
    )
    def test_exp_arguments(self, args: tuple[int, int, int], message: str) -> None:
        with pytest.raises(RuleBuildError, match=message):
            exp(*args)

    def test_exp_rejects_non_integer(self) -> None:
        with pytest.raises(ValidationError, match="unsupported type 'float'"):
            exp(2, 0, 2).validate(None, 2.0)


class TestStrings:
    def test_one_of(self) -> None:
        v = one_of("a", "b")
        v.validate(None, "a")
        with pytest.raises(ValidationError, match=r"the string 'c' is not one of \[a b\]"):
            v.validate(None, "c")
        with pytest.raises(ValidationError, match="expect a string"):
            v.validate(None, 1)

    def test_one_of_needs_values(self) -> None:
        with pytest.raises(RuleBuildError):
            one_of()

    @pytest.mark.parametrize("value", ["1", "-2.5", "1e10", ".5"])
    def test_is_number(self, value: str) -> None:
        is_number().validate(None, value)

    @pytest.mark.parametrize("value", ["", "abc", " 1", "1_000", "1.2.3"])
    def test_not_a_number(self, value: str) -> None:
        with pytest.raises(ValidationError, match="the string is not a number"):
            is_number().validate(None, value)

    @pytest.mark.parametrize(("value", "ok"), [("12", True), ("-3", True), ("1.0", False)])
    def test_is_integer(self, value: str, ok: bool) -> None:
        if ok:
            is_integer().validate(None, value)
        else:
            with pytest.raises(ValidationError):
                is_integer().validate(None, value)


class TestNet:
    @pytest.mark.parametrize("value", ["127.0.0.1", "fe80::1", ipaddress.ip_address("10.0.0.1")])
    def test_ip(self, value: Any) -> None:
        ip().validate(None, value)

    def test_ip_invalid(self) -> None:
        with pytest.raises(ValidationError, match="the string is not a valid ip"):
            ip().validate(None, "1.2.3")

    @pytest.mark.parametrize("value", ["10.0.0.0/8", "10.1.2.3/24", "2001:db8::/32"])
    def test_cidr(self, value: str) -> None:
        cidr().validate(None, value)

    @pytest.mark.parametrize("value", ["10.0.0.1", "10.0.0.0/33", "x/8"])
    def test_cidr_invalid(self, value: str) -> None:
        with pytest.raises(ValidationError, match="not a valid cidr"):
            cidr().validate(None, value)

    @pytest.mark.parametrize("value", ["00-1A-2B-3C-4D-5E", "001a.2b3c.4d5e"])
    def test_mac(self, value: str) -> None:
        mac().validate(None, value)

    @pytest.mark.parametrize("value", ["[::1]:80", "example.com:443", ":80"])
    def test_addr_needs_host_and_port(self, value: str) -> None:
        if value.startswith(":"):
            with pytest.raises(ValidationError, match="not a valid address"):
                addr().validate(None, value)
        else:
            addr().validate(None, value)

    def test_split_host_port(self) -> None:
        assert split_host_port("a:1") == ("a", "1")
        assert split_host_port("::1") == ("", "")
        assert split_host_port("[::1]") == ("", "")


class TestTimes:
    def test_time_layout_accepts_time_objects(self) -> None:
        time_layout("%Y").validate(None, dt.date(2024, 1, 1))

    def test_time_layout_mismatch(self) -> None:
        with pytest.raises(ValidationError, match="does not match the layout"):
            time_layout("%Y-%m-%d").validate(None, "01/02/2024")

    @pytest.mark.parametrize("value", ["0", "300ms", "-1.5h", "2h45m", "1µs", ".5s"])
    def test_duration(self, value: str) -> None:
        duration().validate(None, value)

    @pytest.mark.parametrize("value", ["", "1", "h", "1d", "1h 30m"])
    def test_bad_duration(self, value: str) -> None:
        with pytest.raises(ValidationError, match="invalid duration"):
            duration().validate(None, value)


class TestCompare:
    def test_numbers(self) -> None:
        assert compare(1, 2, "x") == -1
        assert compare(2, 2, "x") == 0
        assert compare(3.0, 2.0, "x") == 1

    def test_inconsistent_types(self) -> None:
        with pytest.raises(ComparisonError, match="not consistent"):
            compare(1, 1.0, "x")

    def test_unsupported(self) -> None:
        with pytest.raises(ComparisonError, match="not support the type str"):
            compare("a", "b", "x")

    def test_bad_compare_result(self) -> None:
        class Odd:
            def compare(self, other: Any) -> int:
                return 7

        with pytest.raises(ComparisonError, match="unknown result"):
            compare(Odd(), Odd(), "x")

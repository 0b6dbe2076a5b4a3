"""Tests for the process-wide reflector in fieldtag.reflect."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from fieldtag import reflect
from fieldtag.errors import FieldValidationError, NotAStructError
from fieldtag.structs.fields import FieldRef, tagged


@dataclass
class _Page:
    size: int = tagged('default:"20" validate:"min(1) && max(100)"', default=0)
    sort: str = tagged('default:"asc" validate:"oneof(\\"asc\\", \\"desc\\")"', default="")


@dataclass
class _Label:
    text: str = tagged('upper:""', default="")


class TestDefaultReflector:
    def test_defaults_then_validates(self) -> None:
        page = _Page()
        reflect.reflect(page)
        assert page.size == 20
        assert page.sort == "asc"

    def test_keeps_explicit_values(self) -> None:
        page = _Page(size=5, sort="desc")
        reflect.reflect(page)
        assert (page.size, page.sort) == (5, "desc")

    def test_invalid_field_raises(self) -> None:
        with pytest.raises(FieldValidationError) as exc_info:
            reflect.reflect(_Page(size=500))
        assert exc_info.value.field == "size"
        assert str(exc_info.value) == "size: the integer is greater than 100"

    def test_none_is_noop(self) -> None:
        reflect.reflect(None)

    def test_rejects_non_struct(self) -> None:
        with pytest.raises(NotAStructError):
            reflect.reflect(42)

    def test_register_simple_func(self) -> None:
        def upper(field: FieldRef, _arg: str) -> None:
            field.set(field.value.upper())

        reflect.register_simple_func("upper", upper)
        try:
            label = _Label(text="hi")
            reflect.reflect(label)
            assert label.text == "HI"
        finally:
            reflect.unregister("upper")

        label = _Label(text="hi")
        reflect.reflect(label)
        assert label.text == "hi"


class TestPackageExports:
    def test_reflect_attribute_is_the_module(self) -> None:
        import importlib
        import types

        import fieldtag

        assert isinstance(fieldtag.reflect, types.ModuleType)
        assert fieldtag.reflect is importlib.import_module("fieldtag.reflect")
        assert fieldtag.reflect.DEFAULT_REFLECTOR is fieldtag.DEFAULT_REFLECTOR

"""Tests for human and JSON rendering of ServiceResult."""

from __future__ import annotations

import json

from fieldtag.output.formatters import format_result
from fieldtag.services.result import ServiceError, ServiceResult


class TestHumanFormat:
    def test_success_with_data(self) -> None:
        result = ServiceResult(ok=True, op="check", data={"rule": "min(1)", "value": [1, 2]})
        assert format_result(result) == "OK: check\n  rule: min(1)\n  value: [1,2]"

    def test_success_without_data(self) -> None:
        assert format_result(ServiceResult(ok=True, op="noop")) == "OK: noop"

    def test_tags(self) -> None:
        result = ServiceResult(
            ok=True,
            op="tags",
            data={
                "tags": [
                    {"name": "json", "value": "id", "stop": False},
                    {"name": "reflect", "value": "-", "stop": True},
                ]
            },
        )
        assert format_result(result).splitlines() == [
            "OK: tags",
            '  json: "id"',
            '  reflect: "-"  (stop)',
        ]

    def test_functions(self) -> None:
        result = ServiceResult(
            ok=True, op="functions", data={"functions": ["max", "min"], "symbols": {}}
        )
        assert "  functions: max min" in format_result(result)

    def test_handlers(self) -> None:
        data = {"handlers": ["default", "set"], "stop_tag": "reflect"}
        result = ServiceResult.success("handlers", data)
        assert format_result(result).splitlines() == [
            "OK: handlers",
            "  handlers: default set",
            "  stop_tag: reflect",
        ]

    def test_error(self) -> None:
        result = ServiceResult(
            ok=False, op="check", error=ServiceError(code="validation_failed", message="bad")
        )
        assert format_result(result) == "ERROR: check: bad"

    def test_error_without_payload(self) -> None:
        assert format_result(ServiceResult(ok=False, op="check")) == "ERROR: check: Unknown error"


class TestJsonFormat:
    def test_round_trips_model(self) -> None:
        result = ServiceResult(
            ok=False,
            op="check",
            error=ServiceError(code="invalid_rule", message="x is not defined", detail={"rule": "x"}),
        )
        data = json.loads(format_result(result, json_output=True))
        assert data["ok"] is False
        assert data["error"] == {
            "code": "invalid_rule",
            "message": "x is not defined",
            "detail": {"rule": "x"},
        }
        assert data["warnings"] == []

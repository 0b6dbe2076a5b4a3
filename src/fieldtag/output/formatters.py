"""Human/JSON output helpers.

The CLI renders a ServiceResult as indented text for humans or as the
model's JSON dump with ``--json``.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fieldtag.services.result import ServiceResult


def _format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def _format_tags(tags: list[dict[str, Any]]) -> list[str]:
    lines: list[str] = []
    for pair in tags:
        suffix = "  (stop)" if pair.get("stop") else ""
        lines.append(f"  {pair['name']}: {_json.dumps(pair['value'])}{suffix}")
    return lines


def _format_data_human(data: dict[str, Any]) -> str:
    """Format result data as indented key-value pairs."""
    lines: list[str] = []
    for key, value in data.items():
        if key == "tags":
            lines.extend(_format_tags(value))
        elif key in ("functions", "handlers"):
            lines.append(f"  {key}: {' '.join(value)}")
        else:
            lines.append(f"  {key}: {_format_value(value)}")
    return "\n".join(lines)


def format_result(result: ServiceResult, *, json_output: bool = False) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
    """
    if json_output:
        return result.model_dump_json(indent=2)
    if result.ok:
        parts = [f"OK: {result.op}"]
        if result.data:
            parts.append(_format_data_human(result.data))
        return "\n".join(parts)
    error_msg = result.error.message if result.error else "Unknown error"
    return f"ERROR: {result.op}: {error_msg}"

"""Support routines for the werror CLI."""

from __future__ import annotations

from collections.abc import Iterable
import json
from typing import Any

import yaml

from werror.config.env import BuildModeReport
from werror.core.catalog import ErrorCatalog
from werror.core.error import ServiceError
from werror.enums import BuildMode, OutputFormat


def parse_template_data(raw: str | None) -> Any:
    """Parse ``--data``; YAML is accepted, and JSON is valid YAML."""
    if raw is None or not raw.strip():
        return None
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ValueError(f"Template data is not valid YAML or JSON: {exc}") from exc


def catalog_rows(
    catalog: ErrorCatalog, status: int | None = None
) -> list[dict[str, Any]]:
    """Describe catalog entries, optionally only those with ``status``."""
    return [
        {"status": err.status, "code": err.code, "message": err.message}
        for err in catalog
        if status is None or err.status == status
    ]


def error_response(err: ServiceError) -> dict[str, Any]:
    """Status line plus serialized body, as a transport would send them."""
    return {"status": err.status, "body": err.to_dict()}


def build_mode_lines(report: BuildModeReport) -> list[str]:
    lines = []
    if report.from_flags is BuildMode.UNKNOWN:
        lines.append("(Check 01): no build flag variable found")
    else:
        lines.append(f"(Check 01): Running in `{report.from_flags.value}` mode!")
    if report.from_variable is BuildMode.UNKNOWN:
        lines.append("(Check 02): Non-makefile build detected")
    else:
        lines.append(f"(Check 02): Running in `{report.from_variable.value}` mode!")
    return lines


def render_output(value: Any, output_format: OutputFormat) -> str:
    if output_format is OutputFormat.JSON:
        return json.dumps(value, indent=2, ensure_ascii=False, default=str)
    if isinstance(value, str):
        return value
    if isinstance(value, Iterable) and not isinstance(value, dict):
        return "\n".join(_text_line(item) for item in value)
    return _text_line(value)


def _text_line(value: Any) -> str:
    if isinstance(value, dict):
        return "  ".join(f"{key}={item}" for key, item in value.items())
    return str(value)

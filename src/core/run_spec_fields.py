"""Type-safe field parsing helpers for run-spec execution.

This module centralizes primitive parsing so run-spec executors can stay
concise and produce consistent validation errors across CLI and SDK flows.
"""

from __future__ import annotations

from typing import Mapping

from core.constants import SUPPORTED_FAILURE_POLICIES
from core.errors import SyncRunSpecError


def required_string(args: Mapping[str, object], field_name: str) -> str:
    """Read a required string field from a run-spec step."""
    value = optional_string(args, field_name)
    if value is None:
        raise SyncRunSpecError(f"Run-spec step is missing required field '{field_name}'.")
    return value


def optional_string(args: Mapping[str, object], field_name: str) -> str | None:
    """Read an optional string field from a run-spec step."""
    value = args.get(field_name)
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    raise SyncRunSpecError(f"Run-spec field '{field_name}' must be a string when provided.")


def required_request_id(args: Mapping[str, object], field_name: str) -> str:
    """Read a PPM request id written either as an integer or a digit string."""
    value = args.get(field_name)
    if isinstance(value, bool):
        raise SyncRunSpecError(f"Run-spec field '{field_name}' must be a request id.")
    if isinstance(value, int) and value > 0:
        return str(value)
    if isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        return value.strip()
    if value is None:
        raise SyncRunSpecError(f"Run-spec step is missing required field '{field_name}'.")
    raise SyncRunSpecError(
        f"Run-spec field '{field_name}' must be a positive integer request id, got '{value}'."
    )


def optional_bool(
    args: Mapping[str, object],
    field_name: str,
    default_value: bool,
) -> bool:
    """Read an optional boolean field from a run-spec step."""
    value = args.get(field_name)
    if value is None:
        return default_value
    if isinstance(value, bool):
        return value
    raise SyncRunSpecError(f"Run-spec field '{field_name}' must be true/false.")


def optional_failure_policy(args: Mapping[str, object], field_name: str) -> str | None:
    """Read an optional failure policy name from a run-spec mapping."""
    value = optional_string(args, field_name)
    if value is None or value in SUPPORTED_FAILURE_POLICIES:
        return value
    supported_rows = ", ".join(SUPPORTED_FAILURE_POLICIES)
    raise SyncRunSpecError(f"Invalid {field_name} '{value}'. Use one of: {supported_rows}.")

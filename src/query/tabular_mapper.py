"""Tabular result mapping for SQL-runner responses.

This module zips column headers with row values into field records,
either as one record or as records keyed by an identifier column.
Blank-equivalent values are omitted unless the caller keeps them.
"""

from __future__ import annotations

from datetime import date
from typing import AbstractSet, Sequence

from core.constants import FEATURE_ID_COLUMN
from core.errors import SyncDataShapeError, SyncEmptyResultError
from core.field_values import is_blank, normalize_token
from core.types import FieldRecord, MilestoneEntry

MILESTONE_COLUMN_COUNT = 4


def map_single_record(
    column_headers: Sequence[str],
    rows: Sequence[Sequence[object]],
    allowed_fields: AbstractSet[str] | None = None,
) -> FieldRecord:
    """Map the first result row into one field record.

    Later rows are ignored for the record but still length-checked.

    Args:
        column_headers: Ordered column names.
        rows: Result rows returned by the query.
        allowed_fields: Optional vocabulary the headers must belong to.

    Returns:
        Field record without blank-equivalent values.

    Raises:
        SyncEmptyResultError: If the result set has no rows.
        SyncDataShapeError: If any row is shorter than the headers or a
            header falls outside ``allowed_fields``.
    """
    if not rows:
        raise SyncEmptyResultError("Query returned no rows: no data available.")
    _validate_headers(column_headers, allowed_fields)
    for row_index, row in enumerate(rows):
        _check_row_length(column_headers, row, row_index)
    return _zip_row(column_headers, rows[0], 0, keep_blank=False)


def map_keyed_records(
    column_headers: Sequence[str],
    rows: Sequence[Sequence[object]],
    id_column: str = FEATURE_ID_COLUMN,
    keep_blank: bool = False,
    allowed_fields: AbstractSet[str] | None = None,
) -> dict[str, FieldRecord]:
    """Group result rows into records keyed by an identifier column.

    Args:
        column_headers: Ordered column names.
        rows: Result rows returned by the query.
        id_column: Identifier column, matched case-insensitively.
        keep_blank: Keep blank-equivalent values as empty strings instead
            of omitting them.
        allowed_fields: Optional vocabulary the non-id headers must belong to.

    Returns:
        Ordered mapping of identifier to field record. The identifier
        column is not stored inside the records.

    Raises:
        SyncEmptyResultError: If the result set has no rows.
        SyncDataShapeError: If the id column is missing, a row is short,
            or a row has a blank identifier.
    """
    if not rows:
        raise SyncEmptyResultError("Query returned no rows: no data available.")
    id_index = _find_column(column_headers, id_column)
    value_headers = [
        header for index, header in enumerate(column_headers) if index != id_index
    ]
    _validate_headers(value_headers, allowed_fields)
    records: dict[str, FieldRecord] = {}
    for row_index, row in enumerate(rows):
        _check_row_length(column_headers, row, row_index)
        raw_id = row[id_index]
        if is_blank(raw_id):
            raise SyncDataShapeError(
                f"Result row #{row_index + 1} has a blank '{id_column}' value. "
                "Every grouped row needs an identifier."
            )
        value_row = [value for index, value in enumerate(row) if index != id_index]
        records[str(raw_id).strip()] = _zip_row(
            value_headers, value_row[: len(value_headers)], row_index, keep_blank
        )
    return records


def map_milestone_entries(rows: Sequence[Sequence[object]]) -> list[MilestoneEntry]:
    """Map milestone rows ``(name, scheduled, actual, status)`` into entries.

    An empty result is valid and yields an empty list.

    Raises:
        SyncDataShapeError: If a row has fewer than four values or a date
            cannot be parsed.
    """
    entries: list[MilestoneEntry] = []
    for row_index, row in enumerate(rows):
        if len(row) < MILESTONE_COLUMN_COUNT:
            raise SyncDataShapeError(
                f"Milestone row #{row_index + 1} has {len(row)} values, "
                f"expected {MILESTONE_COLUMN_COUNT} (name, scheduled, actual, status)."
            )
        name, scheduled, actual, status = row[:MILESTONE_COLUMN_COUNT]
        entries.append(
            MilestoneEntry(
                name=_text(name),
                scheduled_finish=parse_iso_date(scheduled),
                actual_finish=parse_iso_date(actual),
                status=_text(status),
            )
        )
    return entries


def map_first_column(rows: Sequence[Sequence[object]]) -> list[str]:
    """Collect the first value of every row, keeping order and duplicates.

    Raises:
        SyncDataShapeError: If a row is empty or its first value is blank.
    """
    values: list[str] = []
    for row_index, row in enumerate(rows):
        if not row or is_blank(row[0]):
            raise SyncDataShapeError(
                f"Result row #{row_index + 1} has no value in its first column."
            )
        values.append(str(row[0]).strip())
    return values


def parse_iso_date(raw_value: object) -> date | None:
    """Parse an ISO-8601 date or date-time, keeping only the date portion.

    Raises:
        SyncDataShapeError: If a non-blank value is not an ISO date.
    """
    if is_blank(raw_value):
        return None
    text = str(raw_value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError as error:
        raise SyncDataShapeError(
            f"Invalid date value '{text}': expected ISO-8601 yyyy-mm-dd prefix."
        ) from error


def _zip_row(
    column_headers: Sequence[str],
    row: Sequence[object],
    row_index: int,
    keep_blank: bool,
) -> FieldRecord:
    _check_row_length(column_headers, row, row_index)
    values: dict[str, str | None] = {}
    for header, raw_value in zip(column_headers, row):
        if is_blank(raw_value):
            if keep_blank:
                values[header] = ""
            continue
        values[header] = str(raw_value)
    return FieldRecord(values)


def _check_row_length(
    column_headers: Sequence[str], row: Sequence[object], row_index: int
) -> None:
    if len(row) < len(column_headers):
        raise SyncDataShapeError(
            f"Result row #{row_index + 1} has {len(row)} values for "
            f"{len(column_headers)} column headers."
        )


def _find_column(column_headers: Sequence[str], column_name: str) -> int:
    wanted = normalize_token(column_name)
    for index, header in enumerate(column_headers):
        if normalize_token(header) == wanted:
            return index
    raise SyncDataShapeError(
        f"Identifier column '{column_name}' is missing from result headers "
        f"{list(column_headers)}."
    )


def _validate_headers(
    column_headers: Sequence[str], allowed_fields: AbstractSet[str] | None
) -> None:
    if allowed_fields is None:
        return
    unknown = sorted(
        normalize_token(header)
        for header in column_headers
        if normalize_token(header) not in allowed_fields
    )
    if unknown:
        raise SyncDataShapeError(
            f"Result contains columns outside the expected vocabulary: {', '.join(unknown)}."
        )


def _text(value: object) -> str:
    return "" if value is None else str(value)

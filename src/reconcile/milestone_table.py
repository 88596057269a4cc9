"""Bounded HTML rendering of project milestones.

The milestone table is written into a fixed-capacity PPM text area.
Rows are dropped whole once the next row would not fit, so the output
is always a closed, well-formed table.
"""

from __future__ import annotations

from datetime import date
from html import escape
from typing import Iterable

from core.constants import (
    DEFAULT_MILESTONE_HTML_MAX,
    MILESTONE_TABLE_CLOSE,
    MISSING_DATE_TEXT,
    MONTH_NAMES,
    NO_MILESTONES_HTML,
)
from core.logging_config import get_logger
from core.types import MilestoneEntry

_LOGGER = get_logger(__name__)

MILESTONE_TABLE_HEADER = (
    '<table style="border: 1px solid black; border-collapse: collapse; width: 98%;">'
    "<tr>"
    '<td style="font-weight: bold; width: 40%;">Milestone</td>'
    '<td style="font-weight: bold; width: 20%;">Scheduled Finish</td>'
    '<td style="font-weight: bold; width: 20%;">Actual Finish</td>'
    '<td style="font-weight: bold;">Status</td>'
    "</tr>"
)


class MilestoneTableBuilder:
    """Accumulate table rows while tracking the emitted length."""

    def __init__(self, max_chars: int = DEFAULT_MILESTONE_HTML_MAX) -> None:
        self._max_chars = max_chars
        self._parts: list[str] = [MILESTONE_TABLE_HEADER]
        self._length = len(MILESTONE_TABLE_HEADER)
        self._row_count = 0

    @property
    def length(self) -> int:
        """Characters emitted so far, excluding the closing tag."""
        return self._length

    @property
    def row_count(self) -> int:
        """Rows accepted so far."""
        return self._row_count

    def fits(self, row_html: str) -> bool:
        """Return True when ``row_html`` and the closing tag still fit."""
        return self._length + len(row_html) + len(MILESTONE_TABLE_CLOSE) <= self._max_chars

    def try_append(self, row_html: str) -> bool:
        """Append a row if it fits and report whether it was accepted."""
        if not self.fits(row_html):
            return False
        self._parts.append(row_html)
        self._length += len(row_html)
        self._row_count += 1
        return True

    def build(self) -> str:
        """Close the table and return the markup."""
        return "".join(self._parts) + MILESTONE_TABLE_CLOSE


def render_milestones(
    entries: Iterable[MilestoneEntry],
    max_chars: int = DEFAULT_MILESTONE_HTML_MAX,
) -> str:
    """Render milestones into an HTML table bounded by ``max_chars``.

    Names and statuses are HTML-escaped before their length is counted,
    so entities such as ``&amp;`` take capacity and fewer rows may fit
    than their raw text would suggest.

    Args:
        entries: Milestones in display order.
        max_chars: Capacity of the destination text field.

    Returns:
        A placeholder paragraph when there are no milestones, otherwise a
        closed table holding as many leading rows as fit.
    """
    entry_list = list(entries)
    if not entry_list:
        return NO_MILESTONES_HTML
    builder = MilestoneTableBuilder(max_chars)
    for entry in entry_list:
        if not builder.try_append(render_milestone_row(entry)):
            break
    html = builder.build()
    _LOGGER.debug(
        "milestone_table_rendered",
        html_length=len(html),
        rows_rendered=builder.row_count,
        rows_dropped=len(entry_list) - builder.row_count,
    )
    return html


def render_milestone_row(entry: MilestoneEntry) -> str:
    """Render one milestone as a ``<tr>`` row."""
    cells = (
        escape(entry.name, quote=False),
        format_milestone_date(entry.scheduled_finish),
        format_milestone_date(entry.actual_finish),
        escape(entry.status, quote=False),
    )
    return "<tr>" + "".join(f"<td>{cell}</td>" for cell in cells) + "</tr>"


def format_milestone_date(value: date | None) -> str:
    """Format a date as ``14 March 2024``, or ``-`` when missing."""
    if value is None:
        return MISSING_DATE_TEXT
    return f"{value.day} {MONTH_NAMES[value.month - 1]} {value.year}"

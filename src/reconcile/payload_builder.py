"""Change-set assembly for feature updates.

Every change-set starts with the two bookkeeping timestamps PPM needs
to accept a request update, followed by the payload fields.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from core.constants import (
    ENTITY_LAST_UPDATE_DATE_TOKEN,
    LAST_UPDATE_DATE_TOKEN,
    MILESTONES_TOKEN,
    PROJECT_PHASE_TOKEN,
    PROJECT_STATUS_TOKEN,
    TIMESTAMP_FORMAT,
)
from core.types import ChangeSet, FieldChange


def format_timestamp(timestamp: datetime) -> str:
    """Format a timestamp with second precision and no timezone."""
    return timestamp.strftime(TIMESTAMP_FORMAT)


def timestamp_changes(timestamp: datetime) -> tuple[FieldChange, FieldChange]:
    """Build the two bookkeeping entries from one instant."""
    stamp = format_timestamp(timestamp)
    return (
        FieldChange(token=LAST_UPDATE_DATE_TOKEN, value=stamp, kind="date"),
        FieldChange(token=ENTITY_LAST_UPDATE_DATE_TOKEN, value=stamp, kind="date"),
    )


def build_change_set(
    reconciled: Iterable[FieldChange],
    timestamp: datetime,
    milestone_html: str | None = None,
) -> ChangeSet:
    """Wrap reconciled changes into a complete change-set.

    Args:
        reconciled: Reconciled field changes, possibly empty.
        timestamp: Current instant, reused for both bookkeeping fields.
        milestone_html: Rendered milestone table for features that carry
            it; inserted after the timestamps even when empty.

    Returns:
        Ordered change-set.
    """
    changes: list[FieldChange] = list(timestamp_changes(timestamp))
    if milestone_html is not None:
        changes.append(FieldChange(token=MILESTONES_TOKEN, value=milestone_html))
    changes.extend(reconciled)
    return ChangeSet(changes=tuple(changes))


def build_status_phase_change_set(status: str, phase: str, timestamp: datetime) -> ChangeSet:
    """Build the change-set that copies project status and phase to a feature."""
    return build_change_set(
        (
            FieldChange(token=PROJECT_STATUS_TOKEN, value=status),
            FieldChange(token=PROJECT_PHASE_TOKEN, value=phase),
        ),
        timestamp,
    )

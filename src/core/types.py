"""Shared typed models.

This module defines immutable data models used by the query, reconcile,
update and sync layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterator, Literal, Mapping

from core.field_values import normalize_token

FieldChangeKind = Literal["string", "date"]
FeatureUpdateStatus = Literal["updated", "failed"]


class FieldRecord(Mapping[str, "str | None"]):
    """Read-only field mapping keyed by case-insensitive PPM tokens.

    Keys are normalized to upper case on construction and keep their
    insertion order, which is the iteration order used by reconciliation.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, str | None] | None = None) -> None:
        normalized: dict[str, str | None] = {}
        for key, value in (values or {}).items():
            normalized[normalize_token(key)] = value
        self._values = normalized

    def __getitem__(self, key: str) -> str | None:
        return self._values[normalize_token(key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and normalize_token(key) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldRecord):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == dict(FieldRecord(other))
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._values.items()))

    def __repr__(self) -> str:
        return f"FieldRecord({self._values!r})"

    def with_values(self, updates: Mapping[str, str | None]) -> "FieldRecord":
        """Return a copy with ``updates`` applied; the original is untouched."""
        merged = dict(self._values)
        for key, value in updates.items():
            merged[normalize_token(key)] = value
        return FieldRecord(merged)


@dataclass(frozen=True)
class MilestoneEntry:
    """One major milestone of a project work plan.

    Attributes:
        name: Milestone task name.
        scheduled_finish: Scheduled finish date, if planned.
        actual_finish: Actual finish date, if completed.
        status: Workflow state name of the milestone task.
    """

    name: str
    scheduled_finish: date | None
    actual_finish: date | None
    status: str


@dataclass(frozen=True)
class FieldChange:
    """One field assignment sent to the Record Update service.

    Attributes:
        token: Unprefixed field token, e.g. ``ISPMO_PRJ_RAG``.
        value: New value; None only when the source itself carried None.
        kind: ``string`` for ordinary fields, ``date`` for bookkeeping timestamps.
    """

    token: str
    value: str | None
    kind: FieldChangeKind = "string"


@dataclass(frozen=True)
class ChangeSet:
    """Ordered field assignments for one target in one update call."""

    changes: tuple[FieldChange, ...]

    @property
    def tokens(self) -> tuple[str, ...]:
        """Field tokens in change order."""
        return tuple(change.token for change in self.changes)

    def value_of(self, token: str) -> str | None:
        """Return the value assigned to ``token``.

        Raises:
            KeyError: If the change-set does not touch ``token``.
        """
        for change in self.changes:
            if change.token == token:
                return change.value
        raise KeyError(token)


@dataclass(frozen=True)
class QueryResult:
    """Tabular response of the SQL runner.

    Attributes:
        column_headers: Ordered column names.
        rows: Ordered result rows, each a list of raw values.
    """

    column_headers: tuple[str, ...]
    rows: tuple[tuple[object, ...], ...]


@dataclass(frozen=True)
class SyncOptions:
    """Options for one project-to-feature field synchronization.

    Attributes:
        project_id: IT project request id.
        project_type: IT project request type name, e.g. ``IS PMO IT-EPMO Project``.
        failure_policy: Optional override of the configured failure policy.
    """

    project_id: str
    project_type: str
    failure_policy: str | None = None


@dataclass(frozen=True)
class StatusPhaseOptions:
    """Options for pushing project status and phase to linked features.

    Attributes:
        project_id: IT project request id.
        status: Current IT project status.
        phase: Current IT project phase.
        failure_policy: Optional override of the configured failure policy.
    """

    project_id: str
    status: str
    phase: str
    failure_policy: str | None = None


@dataclass(frozen=True)
class FeatureUpdateOutcome:
    """Result of pushing one change-set to one feature.

    Attributes:
        feature_id: Feature request id.
        feature_type: Feature request type name, or ``linked`` for id-only runs.
        status: ``updated`` or ``failed``.
        tokens: Tokens sent in the change-set.
        error: Failure message when status is ``failed``.
    """

    feature_id: str
    feature_type: str
    status: FeatureUpdateStatus
    tokens: tuple[str, ...] = ()
    error: str | None = None


@dataclass(frozen=True)
class SyncRunResult:
    """Summary of one synchronization run.

    Attributes:
        project_id: IT project request id.
        outcomes: Per-feature outcomes in processing order.
        milestone_count: Milestones returned for the project.
    """

    project_id: str
    outcomes: tuple[FeatureUpdateOutcome, ...] = field(default_factory=tuple)
    milestone_count: int = 0

    @property
    def updated_count(self) -> int:
        """Count features updated successfully."""
        return sum(1 for outcome in self.outcomes if outcome.status == "updated")

    @property
    def failed_count(self) -> int:
        """Count features whose update failed."""
        return sum(1 for outcome in self.outcomes if outcome.status == "failed")

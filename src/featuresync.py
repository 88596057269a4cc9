"""Public SDK surface for featuresync.

This module provides a stable import path for SDK users.
It re-exports the primary client, typed option models, and the pure
reconciliation and rendering helpers.
"""

from __future__ import annotations

from core.config import SyncConfig
from core.errors import (
    SyncConfigError,
    SyncDataShapeError,
    SyncEmptyResultError,
    SyncError,
    SyncProtocolError,
    SyncRunSpecError,
    SyncTransportError,
    SyncValidationError,
)
from core.types import (
    ChangeSet,
    FeatureUpdateOutcome,
    FieldChange,
    FieldRecord,
    MilestoneEntry,
    StatusPhaseOptions,
    SyncOptions,
    SyncRunResult,
)
from core.variants import FeatureVariant, ProjectVariant
from query.tabular_mapper import map_keyed_records, map_single_record
from reconcile.description import describe_plain, describe_with_epmo
from reconcile.field_reconciliation import reconcile_fields
from reconcile.milestone_table import render_milestones
from reconcile.payload_builder import build_change_set
from sync.sync_client import SyncClient

__all__ = [
    "ChangeSet",
    "FeatureUpdateOutcome",
    "FeatureVariant",
    "FieldChange",
    "FieldRecord",
    "MilestoneEntry",
    "ProjectVariant",
    "StatusPhaseOptions",
    "SyncClient",
    "SyncConfig",
    "SyncConfigError",
    "SyncDataShapeError",
    "SyncEmptyResultError",
    "SyncError",
    "SyncOptions",
    "SyncProtocolError",
    "SyncRunResult",
    "SyncRunSpecError",
    "SyncTransportError",
    "SyncValidationError",
    "build_change_set",
    "describe_plain",
    "describe_with_epmo",
    "map_keyed_records",
    "map_single_record",
    "reconcile_fields",
    "render_milestones",
]

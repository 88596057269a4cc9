"""featuresync exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each layer raises a specific error type so the orchestration layer
can decide between aborting a run and recording a per-feature failure.
"""

from __future__ import annotations


class SyncError(Exception):
    """Base exception for all featuresync failures."""


class SyncConfigError(SyncError):
    """Raised for invalid runtime configuration."""


class SyncTransportError(SyncError):
    """Raised when a PPM collaborator cannot be reached."""


class SyncProtocolError(SyncError):
    """Raised when a PPM collaborator answers with a non-success status or bad body."""


class SyncDataShapeError(SyncError):
    """Raised when tabular results miss expected columns or values."""


class SyncEmptyResultError(SyncDataShapeError):
    """Raised when a query returns no rows where at least one is required."""


class SyncValidationError(SyncError):
    """Raised for unrecognized variant names and invalid identifiers."""


class SyncRunSpecError(SyncError):
    """Raised for invalid or unsupported run-spec configuration."""

"""Policy-aware delivery of one change-set to one feature."""

from __future__ import annotations

from core.config import FailurePolicy
from core.errors import SyncProtocolError, SyncTransportError
from core.logging_config import get_logger
from core.types import ChangeSet, FeatureUpdateOutcome
from sync.collaborators import RequestUpdater

_LOGGER = get_logger(__name__)


def push_change_set(
    updater: RequestUpdater,
    feature_id: str,
    feature_type: str,
    change_set: ChangeSet,
    failure_policy: FailurePolicy,
) -> FeatureUpdateOutcome:
    """Push a change-set and turn collaborator failures into outcomes.

    Args:
        updater: Record update collaborator.
        feature_id: Target feature request id.
        feature_type: Feature request type name for reporting.
        change_set: Ordered field changes.
        failure_policy: ``abort`` re-raises collaborator errors,
            ``continue`` records them as a failed outcome.

    Returns:
        Outcome of the update.

    Raises:
        SyncTransportError: Under ``abort`` when PPM cannot be reached.
        SyncProtocolError: Under ``abort`` when PPM rejects the update.
    """
    try:
        updater.update_request(feature_id, change_set)
    except (SyncTransportError, SyncProtocolError) as error:
        _LOGGER.error(
            "feature_update_failed",
            feature_id=feature_id,
            feature_type=feature_type,
            failure_policy=failure_policy,
            error=str(error),
        )
        if failure_policy == "abort":
            raise
        return FeatureUpdateOutcome(
            feature_id=feature_id,
            feature_type=feature_type,
            status="failed",
            tokens=change_set.tokens,
            error=str(error),
        )
    _LOGGER.info(
        "feature_update_pushed",
        feature_id=feature_id,
        feature_type=feature_type,
        change_count=len(change_set.changes),
    )
    return FeatureUpdateOutcome(
        feature_id=feature_id,
        feature_type=feature_type,
        status="updated",
        tokens=change_set.tokens,
    )

"""Project status and phase propagation to linked features.

Workflow steps on the IT project call this to copy the current status
and phase onto every feature linked to the project.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from core.config import FailurePolicy, SyncConfig, parse_failure_policy
from core.logging_config import get_logger
from core.types import FeatureUpdateOutcome, StatusPhaseOptions, SyncRunResult
from query.query_catalog import build_linked_feature_ids_query, validate_request_id
from query.tabular_mapper import map_first_column
from reconcile.payload_builder import build_status_phase_change_set
from sync.collaborators import QueryRunner, RequestUpdater
from sync.feature_update import push_change_set

_LOGGER = get_logger(__name__)

LINKED_FEATURE_TYPE = "linked"


class StatusPhaseSyncRunner:
    """Runner that pushes status and phase to every linked feature id."""

    def __init__(
        self,
        options: StatusPhaseOptions,
        config: SyncConfig,
        query_runner: QueryRunner,
        updater: RequestUpdater,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._project_id = validate_request_id(options.project_id)
        self._options = options
        self._failure_policy: FailurePolicy = parse_failure_policy(
            options.failure_policy or config.failure_policy
        )
        self._query_runner = query_runner
        self._updater = updater
        self._clock = clock

    def run(self) -> SyncRunResult:
        """Update each linked feature id once per occurrence in the query result."""
        result = self._query_runner.run_query(build_linked_feature_ids_query(self._project_id))
        feature_ids = map_first_column(result.rows)
        if not feature_ids:
            _LOGGER.info("linked_features_empty", project_id=self._project_id)
        outcomes: list[FeatureUpdateOutcome] = []
        for feature_id in feature_ids:
            change_set = build_status_phase_change_set(
                self._options.status, self._options.phase, self._clock()
            )
            outcomes.append(
                push_change_set(
                    self._updater,
                    feature_id,
                    LINKED_FEATURE_TYPE,
                    change_set,
                    self._failure_policy,
                )
            )
        _LOGGER.info(
            "status_phase_sync_completed",
            project_id=self._project_id,
            feature_count=len(feature_ids),
        )
        return SyncRunResult(project_id=self._project_id, outcomes=tuple(outcomes))

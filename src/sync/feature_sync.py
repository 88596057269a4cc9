"""Project-to-feature field synchronization.

This module coordinates the project query, milestone rendering, and
per-feature reconciliation and update for one IT project run.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from core.config import FailurePolicy, SyncConfig, parse_failure_policy
from core.errors import SyncEmptyResultError, SyncProtocolError, SyncTransportError
from core.logging_config import get_logger
from core.types import (
    FeatureUpdateOutcome,
    FieldRecord,
    MilestoneEntry,
    SyncOptions,
    SyncRunResult,
)
from core.variants import FeatureVariant, ProjectVariant
from query.query_catalog import (
    build_feature_query,
    build_milestone_query,
    build_project_query,
    validate_request_id,
)
from query.tabular_mapper import map_keyed_records, map_milestone_entries, map_single_record
from reconcile.field_reconciliation import reconcile_fields
from reconcile.milestone_table import render_milestones
from reconcile.payload_builder import build_change_set
from sync.collaborators import QueryRunner, RequestUpdater
from sync.feature_update import push_change_set

_LOGGER = get_logger(__name__)


class FeatureSyncRunner:
    """Runner for one project-to-feature synchronization."""

    def __init__(
        self,
        options: SyncOptions,
        config: SyncConfig,
        query_runner: QueryRunner,
        updater: RequestUpdater,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Create a runner, validating options before any query runs.

        Raises:
            SyncValidationError: For an unknown project type or bad project id.
            SyncConfigError: For an unknown failure policy override.
        """
        self._project_id = validate_request_id(options.project_id)
        self._variant = ProjectVariant.from_name(options.project_type)
        self._failure_policy: FailurePolicy = parse_failure_policy(
            options.failure_policy or config.failure_policy
        )
        self._config = config
        self._query_runner = query_runner
        self._updater = updater
        self._clock = clock

    def run(self) -> SyncRunResult:
        """Synchronize every linked feature and return per-feature outcomes."""
        _LOGGER.info(
            "feature_sync_started",
            project_id=self._project_id,
            project_type=self._variant.value,
            failure_policy=self._failure_policy,
        )
        project = self._load_project()
        milestones = self._load_milestones()
        milestone_html = render_milestones(milestones, self._config.milestone_html_max)
        outcomes: list[FeatureUpdateOutcome] = []
        for feature_variant in FeatureVariant:
            features = self._load_features(feature_variant)
            for feature_id, feature in features.items():
                outcome = self._update_feature(
                    feature_variant, feature_id, feature, project, milestone_html
                )
                outcomes.append(outcome)
        result = SyncRunResult(
            project_id=self._project_id,
            outcomes=tuple(outcomes),
            milestone_count=len(milestones),
        )
        _LOGGER.info(
            "feature_sync_completed",
            project_id=self._project_id,
            updated=result.updated_count,
            failed=result.failed_count,
        )
        return result

    def _load_project(self) -> FieldRecord:
        result = self._query_runner.run_query(build_project_query(self._variant, self._project_id))
        try:
            return map_single_record(
                result.column_headers,
                result.rows,
                allowed_fields=self._variant.source_fields,
            )
        except SyncEmptyResultError:
            _LOGGER.warning("project_query_empty", project_id=self._project_id)
            return FieldRecord()

    def _load_milestones(self) -> list[MilestoneEntry]:
        result = self._query_runner.run_query(build_milestone_query(self._project_id))
        milestones = map_milestone_entries(result.rows)
        if not milestones:
            _LOGGER.info("project_milestones_empty", project_id=self._project_id)
        return milestones

    def _load_features(self, feature_variant: FeatureVariant) -> dict[str, FieldRecord]:
        try:
            result = self._query_runner.run_query(
                build_feature_query(feature_variant, self._project_id)
            )
        except (SyncTransportError, SyncProtocolError) as error:
            if self._failure_policy == "abort":
                raise
            _LOGGER.error(
                "feature_query_failed",
                project_id=self._project_id,
                feature_type=feature_variant.value,
                error=str(error),
            )
            return {}
        try:
            return map_keyed_records(
                result.column_headers,
                result.rows,
                keep_blank=True,
                allowed_fields=feature_variant.target_fields,
            )
        except SyncEmptyResultError:
            _LOGGER.info(
                "feature_query_empty",
                project_id=self._project_id,
                feature_type=feature_variant.value,
            )
            return {}

    def _update_feature(
        self,
        feature_variant: FeatureVariant,
        feature_id: str,
        feature: FieldRecord,
        project: FieldRecord,
        milestone_html: str,
    ) -> FeatureUpdateOutcome:
        reconciled = reconcile_fields(project, feature, self._variant)
        change_set = build_change_set(
            reconciled,
            self._clock(),
            milestone_html if feature_variant.receives_milestones else None,
        )
        return push_change_set(
            self._updater,
            feature_id,
            feature_variant.value,
            change_set,
            self._failure_policy,
        )

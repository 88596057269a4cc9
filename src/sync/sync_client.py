"""Python SDK for PPM feature synchronization.

This module exposes high-level APIs for field synchronization, status
and phase propagation, and declarative run-spec execution.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from core.config import SyncConfig, normalize_base_url
from core.http_session import create_ppm_session
from core.run_spec_execution import execute_run_spec_file
from core.types import StatusPhaseOptions, SyncOptions, SyncRunResult
from query.sql_runner_client import SqlRunnerClient
from sync.feature_sync import FeatureSyncRunner
from sync.status_phase_sync import StatusPhaseSyncRunner
from update.request_update_client import RequestUpdateClient


class SyncClient:
    """Primary SDK entry point for synchronization workflows."""

    def __init__(self, config: SyncConfig | None = None, session: Any | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            session: Optional HTTP session shared by both collaborators.
        """
        self._config = config or SyncConfig.from_env()
        self._session = session

    @property
    def config(self) -> SyncConfig:
        """Runtime configuration used by this client."""
        return self._config

    def sync_features(self, options: SyncOptions) -> SyncRunResult:
        """Synchronize project fields onto every linked feature.

        Args:
            options: Project id, project type and optional failure policy.

        Returns:
            Per-feature outcomes.

        Raises:
            SyncValidationError: For unknown project types or bad ids.
            SyncTransportError: If PPM cannot be reached under ``abort``.
            SyncProtocolError: If PPM rejects a call under ``abort``.
        """
        query_runner, updater = self._build_collaborators()
        runner = FeatureSyncRunner(options, self._config, query_runner, updater)
        return runner.run()

    def sync_status_phase(self, options: StatusPhaseOptions) -> SyncRunResult:
        """Copy project status and phase onto every linked feature.

        Args:
            options: Project id, status, phase and optional failure policy.

        Returns:
            Per-feature outcomes.
        """
        query_runner, updater = self._build_collaborators()
        runner = StatusPhaseSyncRunner(options, self._config, query_runner, updater)
        return runner.run()

    def with_base_url(self, base_url: str) -> "SyncClient":
        """Clone the client pointing at a different PPM environment.

        Args:
            base_url: New PPM base URL.

        Returns:
            New SDK client instance.
        """
        updated_config = replace(self._config, base_url=normalize_base_url(base_url))
        return SyncClient(updated_config, self._session)

    def run_spec(self, spec_file: str) -> tuple[str, ...]:
        """Execute a YAML run-spec through the shared execution engine.

        Args:
            spec_file: Path to YAML run-spec file.

        Returns:
            Ordered command output lines.
        """
        return execute_run_spec_file(self, spec_file)

    def close(self) -> None:
        """Close the HTTP session, if one was opened.

        Clones made by ``with_base_url`` share the session and are closed too.
        """
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> "SyncClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _build_collaborators(self) -> tuple[SqlRunnerClient, RequestUpdateClient]:
        self._config.require_connection()
        if self._session is None:
            self._session = create_ppm_session(self._config)
        return (
            SqlRunnerClient(self._config, self._session),
            RequestUpdateClient(self._config, self._session),
        )

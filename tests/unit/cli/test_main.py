"""Unit tests for CLI command handling."""

from __future__ import annotations

import pytest

from cli.main import main
from core.errors import SyncTransportError
from core.types import FeatureUpdateOutcome, StatusPhaseOptions, SyncOptions, SyncRunResult
from sync.sync_client import SyncClient


@pytest.fixture(autouse=True)
def _ppm_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PPM_BASE_URL", "https://ppm.example.com/")
    monkeypatch.setenv("PPM_USERNAME", "svc_sync")
    monkeypatch.setenv("PPM_PASSWORD", "secret")
    monkeypatch.delenv("PPM_FAILURE_POLICY", raising=False)


def test_cli_sync_features_prints_outcomes(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """CLI sync-features should print one row per feature and a summary."""
    captured: dict[str, object] = {}

    def _fake_sync_features(self: SyncClient, options: SyncOptions) -> SyncRunResult:
        captured["options"] = options
        captured["base_url"] = self.config.base_url
        return SyncRunResult(
            project_id=options.project_id,
            outcomes=(FeatureUpdateOutcome("40001", "IS PMO Feature", "updated"),),
        )

    monkeypatch.setattr(SyncClient, "sync_features", _fake_sync_features)
    exit_code = main(
        [
            "--base-url",
            "https://ppm-test.example.com",
            "sync-features",
            "--project-id",
            "30123",
            "--project-type",
            "IS PMO IT-KTLO Project",
        ]
    )
    output = capsys.readouterr().out.strip().splitlines()

    assert (
        exit_code == 0
        and output == ["40001\tIS PMO Feature\tupdated", "project_id=30123", "updated=1", "failed=0"]
        and captured
        == {
            "options": SyncOptions(project_id="30123", project_type="IS PMO IT-KTLO Project"),
            "base_url": "https://ppm-test.example.com/",
        }
    )


def test_cli_sync_status_phase_continue_on_error_returns_failure_code(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Recorded feature failures should make the command exit non-zero."""
    captured: dict[str, object] = {}

    def _fake_sync_status_phase(
        self: SyncClient, options: StatusPhaseOptions
    ) -> SyncRunResult:
        captured["options"] = options
        return SyncRunResult(
            project_id=options.project_id,
            outcomes=(FeatureUpdateOutcome("40001", "linked", "failed", error="HTTP 500"),),
        )

    monkeypatch.setattr(SyncClient, "sync_status_phase", _fake_sync_status_phase)
    exit_code = main(
        [
            "sync-status-phase",
            "--project-id",
            "30123",
            "--status",
            "In Progress",
            "--phase",
            "Build",
            "--continue-on-error",
        ]
    )
    output = capsys.readouterr().out.strip().splitlines()

    assert (
        exit_code == 1
        and output[-1] == "failed=1"
        and captured["options"]
        == StatusPhaseOptions(
            project_id="30123", status="In Progress", phase="Build", failure_policy="continue"
        )
    )


def test_cli_reports_sync_errors_with_exit_code(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    def _failing_sync_features(self: SyncClient, options: SyncOptions) -> SyncRunResult:
        raise SyncTransportError("PPM unreachable")

    monkeypatch.setattr(SyncClient, "sync_features", _failing_sync_features)
    exit_code = main(
        ["sync-features", "--project-id", "1", "--project-type", "IS PMO IT-EPMO Project"]
    )

    assert exit_code == 1 and capsys.readouterr().out.strip() == "sync_error=PPM unreachable"


def test_cli_rejects_unknown_project_type(capsys: pytest.CaptureFixture[str]) -> None:
    """Unknown request types should be reported through the sync error path."""
    exit_code = main(["sync-features", "--project-id", "1", "--project-type", "Epic"])

    assert exit_code == 1 and capsys.readouterr().out.startswith(
        "sync_error=Invalid IT project request type name 'Epic'"
    )


def test_cli_reports_non_ascii_project_id_as_sync_error(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Digit-like characters outside 0-9 should be rejected before any query."""
    exit_code = main(
        ["sync-features", "--project-id", "²", "--project-type", "IS PMO IT-KTLO Project"]
    )

    assert exit_code == 1 and capsys.readouterr().out.startswith(
        "sync_error=Invalid PPM request id"
    )

"""Unit tests for the SDK client wiring."""

from __future__ import annotations

import pytest

from core.config import SyncConfig
from core.errors import SyncConfigError
from core.types import SyncOptions, SyncRunResult
from sync.sync_client import SyncClient
from tests.fixture_paths import fixture_path
from tests.sync_fakes import FakeResponse, FakeSession


def test_with_base_url_normalizes_and_keeps_credentials() -> None:
    client = SyncClient(SyncConfig(base_url="https://prod/", username="u", password="p"))

    cloned = client.with_base_url("https://test/itg")

    assert cloned.config.base_url == "https://test/itg/" and cloned.config.username == "u"


def test_sync_features_requires_connection_settings() -> None:
    client = SyncClient(SyncConfig(base_url="", username="", password=""))

    with pytest.raises(SyncConfigError):
        client.sync_features(SyncOptions(project_id="1", project_type="IS PMO IT-KTLO Project"))


def test_sync_features_runs_against_shared_session() -> None:
    """One session should serve the SQL runner and the update endpoint."""
    empty = {"columnHeaders": [], "results": []}
    project = {"columnHeaders": ["DESCRIPTION"], "results": [{"values": ["Alpha"]}]}
    session = FakeSession(
        FakeResponse(body=project),
        FakeResponse(body=empty),
        FakeResponse(body=empty),
        FakeResponse(body=empty),
        FakeResponse(body=empty),
    )
    client = SyncClient(
        SyncConfig(base_url="https://ppm.example.com/", username="u", password="p"),
        session,
    )

    result = client.sync_features(
        SyncOptions(project_id="30123", project_type="IS PMO IT-KTLO Project")
    )

    assert result.outcomes == () and [call["method"] for call in session.calls] == ["POST"] * 5


def test_run_spec_executes_steps_through_client(monkeypatch: pytest.MonkeyPatch) -> None:
    """SDK run-spec should use the same execution engine as the CLI."""
    seen: list[str] = []

    def _fake_sync_features(self: SyncClient, options: SyncOptions) -> SyncRunResult:
        seen.append(options.project_type)
        return SyncRunResult(project_id=options.project_id)

    def _fake_sync_status_phase(self: SyncClient, options: object) -> SyncRunResult:
        return SyncRunResult(project_id="30123")

    monkeypatch.setattr(SyncClient, "sync_features", _fake_sync_features)
    monkeypatch.setattr(SyncClient, "sync_status_phase", _fake_sync_status_phase)
    client = SyncClient(SyncConfig(base_url="https://prod/", username="u", password="p"))

    output = client.run_spec(str(fixture_path("run_spec/valid_batch.yaml")))

    assert seen == ["IS PMO IT-EPMO Project"] and output.count("failed=0") == 2


def test_context_manager_closes_session() -> None:
    """Leaving the client context should release the HTTP session."""
    session = FakeSession()

    with SyncClient(
        SyncConfig(base_url="https://prod/", username="u", password="p"), session
    ) as client:
        client.with_base_url("https://test/")

    assert session.closed

"""Unit tests for run-spec parsing and execution."""

from __future__ import annotations

from typing import Any

import pytest

from core.errors import SyncRunSpecError
from core.run_spec import load_run_spec, parse_run_spec
from core.run_spec_execution import execute_run_spec, execute_run_spec_file
from core.types import FeatureUpdateOutcome, StatusPhaseOptions, SyncOptions, SyncRunResult
from tests.fixture_paths import fixture_path


class _RecordingClient:
    def __init__(self, base_url: str = "https://ppm.example.com/") -> None:
        self.base_url = base_url
        self.calls: list[object] = []

    def with_base_url(self, base_url: str) -> Any:
        clone = _RecordingClient(base_url)
        clone.calls = self.calls
        return clone

    def sync_features(self, options: SyncOptions) -> SyncRunResult:
        self.calls.append((self.base_url, options))
        return SyncRunResult(
            project_id=options.project_id,
            outcomes=(FeatureUpdateOutcome("40001", "IS PMO Feature", "updated"),),
        )

    def sync_status_phase(self, options: StatusPhaseOptions) -> SyncRunResult:
        self.calls.append((self.base_url, options))
        return SyncRunResult(project_id=options.project_id)


def test_load_run_spec_valid_batch_parses_steps() -> None:
    """Valid run-spec should parse expected command order."""
    spec = load_run_spec(str(fixture_path("run_spec/valid_batch.yaml")))

    assert tuple(step.command for step in spec.steps) == ("sync-features", "sync-status-phase")


def test_load_run_spec_invalid_command_raises_error() -> None:
    """Unsupported command name should raise run-spec error."""
    with pytest.raises(SyncRunSpecError, match="delete-features"):
        load_run_spec(str(fixture_path("run_spec/invalid_command.yaml")))


def test_load_run_spec_invalid_defaults_key_raises_error() -> None:
    """Unknown defaults field should be rejected."""
    with pytest.raises(SyncRunSpecError, match="dataset"):
        load_run_spec(str(fixture_path("run_spec/invalid_defaults_key.yaml")))


def test_load_run_spec_missing_file_raises_error(tmp_path: Any) -> None:
    with pytest.raises(SyncRunSpecError, match="does not exist"):
        load_run_spec(str(tmp_path / "absent.yaml"))


def test_load_run_spec_rejects_malformed_yaml(tmp_path: Any) -> None:
    spec_file = tmp_path / "broken.yaml"
    spec_file.write_text("version: 1\nsteps: [\n", encoding="utf-8")

    with pytest.raises(SyncRunSpecError, match="Fix YAML syntax"):
        load_run_spec(str(spec_file))


@pytest.mark.parametrize(
    "payload",
    [
        {"version": 2, "steps": [{"command": "sync-features"}]},
        {"version": 1, "steps": []},
        {"version": 1},
        {"version": 1, "steps": [{"command": "sync-features"}], "extra": True},
        {"version": 1, "steps": [{"command": "sync-features", "args": {}, "project_id": 1}]},
        {"version": 1, "defaults": {"failure_policy": "retry"}, "steps": [{"command": "x"}]},
    ],
)
def test_parse_run_spec_rejects_invalid_schema(payload: object) -> None:
    with pytest.raises(SyncRunSpecError):
        parse_run_spec(payload)


def test_execute_run_spec_applies_defaults_and_step_overrides() -> None:
    """Steps should inherit project type and map continue_on_error to a policy."""
    client = _RecordingClient()

    output = execute_run_spec_file(client, str(fixture_path("run_spec/valid_batch.yaml")))

    assert client.calls == [
        (
            "https://ppm.example.com/",
            SyncOptions(project_id="30123", project_type="IS PMO IT-EPMO Project"),
        ),
        (
            "https://ppm.example.com/",
            StatusPhaseOptions(
                project_id="30123",
                status="In Progress",
                phase="Build",
                failure_policy="continue",
            ),
        ),
    ] and output == (
        "40001\tIS PMO Feature\tupdated",
        "project_id=30123",
        "updated=1",
        "failed=0",
        "project_id=30123",
        "updated=0",
        "failed=0",
    )


def test_execute_run_spec_switches_base_url_from_defaults() -> None:
    client = _RecordingClient()

    execute_run_spec(client, load_run_spec(str(fixture_path("run_spec/base_url_override.yaml"))))

    assert client.calls == [
        (
            "https://ppm-test.example.com/itg",
            SyncOptions(
                project_id="30123",
                project_type="IS PMO IT-Infrastructure Project",
                failure_policy="continue",
            ),
        )
    ]


def test_execute_run_spec_missing_project_type_raises_error() -> None:
    """sync-features should fail when no project type is available."""
    with pytest.raises(SyncRunSpecError, match="requires project_type"):
        execute_run_spec_file(
            _RecordingClient(), str(fixture_path("run_spec/missing_project_type.yaml"))
        )


def test_execute_run_spec_rejects_non_numeric_project_id() -> None:
    spec = parse_run_spec(
        {
            "version": 1,
            "steps": [
                {
                    "command": "sync-status-phase",
                    "project_id": "abc",
                    "status": "Closed",
                    "phase": "Done",
                }
            ],
        }
    )

    with pytest.raises(SyncRunSpecError, match="positive integer"):
        execute_run_spec(_RecordingClient(), spec)

"""Shared run-spec execution engine for CLI and SDK workflows.

This module maps validated run-spec steps to client operations so different
entry points can execute one declarative sync batch without drift.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from core.errors import SyncRunSpecError
from core.run_spec import RunSpec, RunSpecStep, load_run_spec
from core.run_spec_fields import (
    optional_bool,
    optional_failure_policy,
    optional_string,
    required_request_id,
    required_string,
)
from core.types import StatusPhaseOptions, SyncOptions, SyncRunResult


class RunSpecClient(Protocol):
    """Client API contract required by run-spec execution."""

    def with_base_url(self, base_url: str) -> Any: ...

    def sync_features(self, options: SyncOptions) -> SyncRunResult: ...

    def sync_status_phase(self, options: StatusPhaseOptions) -> SyncRunResult: ...


@dataclass(frozen=True)
class RunSpecExecutionContext:
    """In-memory context used to execute run-spec steps."""

    client: RunSpecClient
    default_project_type: str | None
    default_failure_policy: str | None


def execute_run_spec_file(client: RunSpecClient, spec_file: str) -> tuple[str, ...]:
    """Load and execute a run-spec file, returning printable output lines."""
    spec = load_run_spec(spec_file)
    return execute_run_spec(client, spec)


def execute_run_spec(client: RunSpecClient, spec: RunSpec) -> tuple[str, ...]:
    """Execute a parsed run-spec object and return output lines."""
    execution_client = (
        client.with_base_url(spec.defaults.base_url) if spec.defaults.base_url else client
    )
    context = RunSpecExecutionContext(
        client=execution_client,
        default_project_type=spec.defaults.project_type,
        default_failure_policy=spec.defaults.failure_policy,
    )
    output_lines: list[str] = []
    for step in spec.steps:
        output_lines.extend(_execute_step(context, step))
    return tuple(output_lines)


def format_run_result(result: SyncRunResult) -> tuple[str, ...]:
    """Render a run result as tab-separated outcome rows plus summary lines."""
    rows = [
        f"{outcome.feature_id}\t{outcome.feature_type}\t{outcome.status}"
        for outcome in result.outcomes
    ]
    rows.append(f"project_id={result.project_id}")
    rows.append(f"updated={result.updated_count}")
    rows.append(f"failed={result.failed_count}")
    return tuple(rows)


def _execute_step(context: RunSpecExecutionContext, step: RunSpecStep) -> tuple[str, ...]:
    if step.command == "sync-features":
        return _execute_sync_features_step(context, step)
    if step.command == "sync-status-phase":
        return _execute_sync_status_phase_step(context, step)
    raise SyncRunSpecError(f"Unsupported run-spec command '{step.command}'.")


def _execute_sync_features_step(
    context: RunSpecExecutionContext,
    step: RunSpecStep,
) -> tuple[str, ...]:
    options = SyncOptions(
        project_id=required_request_id(step.args, "project_id"),
        project_type=_resolve_project_type(context, step),
        failure_policy=_resolve_failure_policy(context, step),
    )
    return format_run_result(context.client.sync_features(options))


def _execute_sync_status_phase_step(
    context: RunSpecExecutionContext,
    step: RunSpecStep,
) -> tuple[str, ...]:
    options = StatusPhaseOptions(
        project_id=required_request_id(step.args, "project_id"),
        status=required_string(step.args, "status"),
        phase=required_string(step.args, "phase"),
        failure_policy=_resolve_failure_policy(context, step),
    )
    return format_run_result(context.client.sync_status_phase(options))


def _resolve_project_type(context: RunSpecExecutionContext, step: RunSpecStep) -> str:
    project_type = optional_string(step.args, "project_type")
    if project_type:
        return project_type
    if context.default_project_type:
        return context.default_project_type
    raise SyncRunSpecError(
        f"Run-spec command '{step.command}' requires project_type. "
        "Set 'project_type' on the step or in top-level defaults."
    )


def _resolve_failure_policy(context: RunSpecExecutionContext, step: RunSpecStep) -> str | None:
    if optional_bool(step.args, "continue_on_error", default_value=False):
        return "continue"
    return optional_failure_policy(step.args, "failure_policy") or context.default_failure_policy

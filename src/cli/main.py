"""featuresync CLI entry points.

This module exposes the project-to-feature sync commands and maps
argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from typing import Any, Sequence

from cli.run_spec_command import add_run_spec_command, run_run_spec_command
from core.errors import SyncError
from core.run_spec_execution import format_run_result
from core.types import StatusPhaseOptions, SyncOptions, SyncRunResult
from core.variants import ProjectVariant
from sync.sync_client import SyncClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="featuresync",
        description="Synchronize PPM IT project fields onto linked features",
    )
    parser.add_argument("--base-url", help="Override PPM_BASE_URL for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_sync_features_command(subparsers)
    _add_sync_status_phase_command(subparsers)
    add_run_spec_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the featuresync CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        with _build_client(args.base_url) as client:
            if args.command == "sync-features":
                return _run_sync_features_command(client, args)
            if args.command == "sync-status-phase":
                return _run_sync_status_phase_command(client, args)
            if args.command == "run-spec":
                return run_run_spec_command(client, args)
    except SyncError as error:
        print(f"sync_error={error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(base_url: str | None) -> SyncClient:
    """Build SDK client with optional base-url override."""
    client = SyncClient()
    if base_url:
        return client.with_base_url(base_url)
    return client


def _run_sync_features_command(client: SyncClient, args: argparse.Namespace) -> int:
    """Handle sync-features command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code, non-zero when any feature update failed.
    """
    options = SyncOptions(
        project_id=args.project_id,
        project_type=args.project_type,
        failure_policy=_failure_policy_override(args),
    )
    return _print_run_result(client.sync_features(options))


def _run_sync_status_phase_command(client: SyncClient, args: argparse.Namespace) -> int:
    """Handle sync-status-phase command."""
    options = StatusPhaseOptions(
        project_id=args.project_id,
        status=args.status,
        phase=args.phase,
        failure_policy=_failure_policy_override(args),
    )
    return _print_run_result(client.sync_status_phase(options))


def _failure_policy_override(args: argparse.Namespace) -> str | None:
    return "continue" if args.continue_on_error else None


def _print_run_result(result: SyncRunResult) -> int:
    for line in format_run_result(result):
        print(line)
    return 0 if result.failed_count == 0 else 1


def _add_sync_features_command(subparsers: Any) -> None:
    """Register sync-features subcommand."""
    parser = subparsers.add_parser(
        "sync-features",
        help="Copy IT project fields and milestones onto every linked feature",
    )
    parser.add_argument("--project-id", required=True, help="IT project request id")
    parser.add_argument(
        "--project-type",
        required=True,
        help="IT project request type name: "
        + ", ".join(variant.value for variant in ProjectVariant),
    )
    _add_continue_on_error_flag(parser)


def _add_sync_status_phase_command(subparsers: Any) -> None:
    """Register sync-status-phase subcommand."""
    parser = subparsers.add_parser(
        "sync-status-phase",
        help="Copy IT project status and phase onto every linked feature",
    )
    parser.add_argument("--project-id", required=True, help="IT project request id")
    parser.add_argument("--status", required=True, help="Current IT project status")
    parser.add_argument("--phase", required=True, help="Current IT project phase")
    _add_continue_on_error_flag(parser)


def _add_continue_on_error_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        help="Record failed feature updates and keep going instead of aborting",
    )

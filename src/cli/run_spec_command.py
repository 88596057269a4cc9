"""Run-spec CLI command wiring.

This module registers the run-spec subcommand and delegates execution to the
shared run-spec engine used by CLI and SDK entry points.
"""

from __future__ import annotations

import argparse
from typing import Any

from core.run_spec_execution import execute_run_spec_file
from sync.sync_client import SyncClient


def add_run_spec_command(subparsers: Any) -> None:
    """Register run-spec subcommand."""
    parser = subparsers.add_parser(
        "run-spec",
        help="Run a declarative YAML batch of sync steps",
    )
    parser.add_argument("spec_file", help="Path to YAML run-spec file")


def run_run_spec_command(client: SyncClient, args: argparse.Namespace) -> int:
    """Handle run-spec command invocation."""
    output_lines = execute_run_spec_file(client, args.spec_file)
    for line in output_lines:
        print(line)
    failed_lines = [line for line in output_lines if line.startswith("failed=")]
    return 1 if any(line != "failed=0" for line in failed_lines) else 0

"""Unit tests for the SQL-runner client."""

from __future__ import annotations

import pytest
import requests

from core.config import SyncConfig
from core.errors import SyncProtocolError, SyncTransportError
from query.query_catalog import build_milestone_query
from query.sql_runner_client import SqlRunnerClient, parse_query_result
from tests.sync_fakes import FakeResponse, FakeSession

_CONFIG = SyncConfig(
    base_url="https://ppm.example.com/itg/",
    username="svc_sync",
    password="secret",
    http_timeout_seconds=5.0,
)


def test_run_query_posts_sql_and_parses_rows() -> None:
    """Runner should POST the SQL text and return typed rows."""
    session = FakeSession(
        FakeResponse(
            body={
                "columnHeaders": ["NAME", "STATE_NAME"],
                "results": [{"values": ["Go Live", "Completed"]}],
            }
        )
    )
    query = build_milestone_query("30123")

    result = SqlRunnerClient(_CONFIG, session).run_query(query)

    assert session.calls == [
        {
            "method": "POST",
            "url": "https://ppm.example.com/itg/rest2/sqlRunner/runSqlQuery",
            "json": {"querySql": query.sql},
            "timeout": 5.0,
        }
    ] and result.rows == (("Go Live", "Completed"),)


def test_run_query_maps_http_error_to_protocol_error() -> None:
    session = FakeSession(FakeResponse(status_code=500, text="ORA-00942"))

    with pytest.raises(SyncProtocolError, match="HTTP 500: ORA-00942"):
        SqlRunnerClient(_CONFIG, session).run_query(build_milestone_query("1"))


def test_run_query_maps_connection_failure_to_transport_error() -> None:
    session = FakeSession(requests.ConnectionError("connection refused"))

    with pytest.raises(SyncTransportError, match="connection refused"):
        SqlRunnerClient(_CONFIG, session).run_query(build_milestone_query("1"))


def test_run_query_rejects_non_json_body() -> None:
    session = FakeSession(FakeResponse(text="<html>login</html>"))

    with pytest.raises(SyncProtocolError, match="not JSON"):
        SqlRunnerClient(_CONFIG, session).run_query(build_milestone_query("1"))


def test_parse_query_result_accepts_missing_headers_for_empty_results() -> None:
    result = parse_query_result({"results": []}, "milestones")

    assert result.column_headers == () and result.rows == ()


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"columnHeaders": [], "results": {}},
        {"columnHeaders": ["A"], "results": [{"v": []}]},
        {"results": [{"values": ["1", "x"]}]},
    ],
)
def test_parse_query_result_rejects_malformed_payloads(payload: dict[str, object]) -> None:
    with pytest.raises(SyncProtocolError):
        parse_query_result(payload, "project")

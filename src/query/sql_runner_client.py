"""Client for the PPM SQL-runner REST endpoint.

This module posts catalog queries and validates the tabular response
shape ``{columnHeaders: [...], results: [{values: [...]}]}``.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.config import SyncConfig
from core.constants import SQL_RUNNER_PATH
from core.errors import SyncProtocolError
from core.http_session import create_ppm_session, send_json_request
from core.logging_config import get_logger
from core.types import QueryResult
from query.query_catalog import SqlQuery

_LOGGER = get_logger(__name__)


class SqlRunnerClient:
    """Execute SQL-runner queries against one PPM environment."""

    def __init__(self, config: SyncConfig, session: Any | None = None) -> None:
        """Create SQL-runner client.

        Args:
            config: Runtime configuration with base URL and credentials.
            session: Optional pre-built session, mainly for tests.
        """
        self._config = config
        self._session = session if session is not None else create_ppm_session(config)
        self._url = f"{config.base_url}{SQL_RUNNER_PATH}"

    def run_query(self, query: SqlQuery) -> QueryResult:
        """Run one query and return its tabular result.

        Args:
            query: Catalog query to execute.

        Returns:
            Parsed column headers and rows.

        Raises:
            SyncTransportError: If the runner cannot be reached.
            SyncProtocolError: If the runner fails or answers with a bad body.
        """
        _LOGGER.info("sql_query_started", query=query.name, url=self._url)
        payload = send_json_request(
            self._session,
            "POST",
            self._url,
            query.to_payload(),
            self._config.http_timeout_seconds,
        )
        result = parse_query_result(payload, query.name)
        _LOGGER.info(
            "sql_query_completed",
            query=query.name,
            column_count=len(result.column_headers),
            row_count=len(result.rows),
        )
        return result


def parse_query_result(payload: Mapping[str, Any], query_name: str) -> QueryResult:
    """Validate and convert a SQL-runner response body.

    Args:
        payload: Decoded JSON response.
        query_name: Query label for error messages.

    Returns:
        Typed query result.

    Raises:
        SyncProtocolError: If required keys are missing or mistyped.
    """
    raw_results = payload.get("results")
    # Headers may be omitted only when the result set is empty.
    default_headers = [] if raw_results == [] else None
    raw_headers = payload.get("columnHeaders", default_headers)
    if not isinstance(raw_headers, list) or not isinstance(raw_results, list):
        raise SyncProtocolError(
            f"SQL runner response for '{query_name}' is missing "
            "'columnHeaders' or 'results' lists."
        )
    rows: list[tuple[object, ...]] = []
    for row_index, raw_row in enumerate(raw_results):
        values = raw_row.get("values") if isinstance(raw_row, dict) else None
        if not isinstance(values, list):
            raise SyncProtocolError(
                f"SQL runner response for '{query_name}' row #{row_index + 1} "
                "has no 'values' list."
            )
        rows.append(tuple(values))
    return QueryResult(
        column_headers=tuple(str(header) for header in raw_headers),
        rows=tuple(rows),
    )

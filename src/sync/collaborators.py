"""Collaborator contracts used by synchronization runners."""

from __future__ import annotations

from typing import Any, Protocol

from core.types import ChangeSet, QueryResult
from query.query_catalog import SqlQuery


class QueryRunner(Protocol):
    """Query Execution Service contract."""

    def run_query(self, query: SqlQuery) -> QueryResult: ...


class RequestUpdater(Protocol):
    """Record Update Service contract."""

    def update_request(self, request_id: str, change_set: ChangeSet) -> dict[str, Any]: ...

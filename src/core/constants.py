"""Core constants used across featuresync modules.

This module centralizes PPM endpoints, field tokens and defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

SQL_RUNNER_PATH = "rest2/sqlRunner/runSqlQuery"
REQUESTS_PATH = "rest2/dm/requests"
DEFAULT_HTTP_TIMEOUT_SECONDS = 20.0
DEFAULT_MILESTONE_HTML_MAX = 4000
DEFAULT_FAILURE_POLICY = "abort"
SUPPORTED_FAILURE_POLICIES = ("abort", "continue")

FEATURE_ID_COLUMN = "FEATURE_REQ_ID"
DESCRIPTION_TOKEN = "DESCRIPTION"
PROJECT_NUMBER_TOKEN = "ISPMO_PRJ_NUM"
EPMO_PROJECT_NUMBER_TOKEN = "EPMO_PROJECT_NUM"
MILESTONES_TOKEN = "ISPMO_MILESTONES"
PROJECT_STATUS_TOKEN = "ISPMO_PRJ_STATUS"
PROJECT_PHASE_TOKEN = "ISPMO_PRJ_PHASE"
LAST_UPDATE_DATE_TOKEN = "LAST_UPDATE_DATE"
ENTITY_LAST_UPDATE_DATE_TOKEN = "ENTITY_LAST_UPDATE_DATE"
HEADER_FIELD_PREFIX = "REQ."
DETAIL_FIELD_PREFIX = "REQD."
HEADER_FIELD_TOKENS = frozenset(
    {DESCRIPTION_TOKEN, LAST_UPDATE_DATE_TOKEN, ENTITY_LAST_UPDATE_DATE_TOKEN}
)
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"

NULL_LITERAL = "null"
NO_MILESTONES_HTML = "<p>No Milestones for the IT Project available</p>"
MILESTONE_TABLE_CLOSE = "</table>"
MISSING_DATE_TEXT = "-"
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

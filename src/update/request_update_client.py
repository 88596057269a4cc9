"""Client for the PPM request update REST endpoint.

This module pushes one encoded change-set per feature request.
"""

from __future__ import annotations

from typing import Any

from core.config import SyncConfig
from core.constants import REQUESTS_PATH
from core.http_session import create_ppm_session, send_json_request
from core.logging_config import get_logger
from core.types import ChangeSet
from query.query_catalog import validate_request_id
from update.payload_encoding import encode_change_set

_LOGGER = get_logger(__name__)


class RequestUpdateClient:
    """Apply change-sets to PPM requests."""

    def __init__(self, config: SyncConfig, session: Any | None = None) -> None:
        """Create request update client.

        Args:
            config: Runtime configuration with base URL and credentials.
            session: Optional pre-built session, mainly for tests.
        """
        self._config = config
        self._session = session if session is not None else create_ppm_session(config)

    def update_request(self, request_id: str, change_set: ChangeSet) -> dict[str, Any]:
        """Send one change-set as a single request update.

        Args:
            request_id: Target feature request id.
            change_set: Ordered field changes.

        Returns:
            Decoded response body of the update call.

        Raises:
            SyncValidationError: If the request id is not numeric.
            SyncTransportError: If PPM cannot be reached.
            SyncProtocolError: If PPM rejects the update.
        """
        url = f"{self._config.base_url}{REQUESTS_PATH}/{validate_request_id(request_id)}"
        payload = encode_change_set(change_set)
        _LOGGER.info(
            "request_update_started",
            request_id=request_id,
            url=url,
            tokens=list(change_set.tokens),
        )
        response = send_json_request(
            self._session,
            "PUT",
            url,
            payload,
            self._config.http_timeout_seconds,
        )
        _LOGGER.info("request_update_completed", request_id=request_id)
        return response

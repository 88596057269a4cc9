"""HTTP session helpers for PPM REST collaborators.

This module encapsulates requests session creation and the mapping of
transport and status failures onto featuresync errors. It is shared by
the SQL-runner and request-update clients.
"""

from __future__ import annotations

from typing import Any, Mapping

import requests

from core.config import SyncConfig
from core.errors import SyncProtocolError, SyncTransportError

_DEFAULT_HEADERS = {
    "accept": "application/json",
    "Ephemeral": "true",
}


def create_ppm_session(config: SyncConfig) -> requests.Session:
    """Create an authenticated session for PPM REST calls.

    Args:
        config: Runtime config with credentials.

    Returns:
        Session carrying basic auth and the PPM default headers.
    """
    session = requests.Session()
    session.auth = (config.username, config.password)
    session.headers.update(_DEFAULT_HEADERS)
    return session


def send_json_request(
    session: Any,
    method: str,
    url: str,
    payload: Mapping[str, object],
    timeout: float,
) -> dict[str, Any]:
    """Send a JSON request and decode the JSON object response.

    Args:
        session: requests session or compatible object.
        method: HTTP method, ``POST`` or ``PUT``.
        url: Absolute endpoint URL.
        payload: JSON request body.
        timeout: Connect and read timeout in seconds.

    Returns:
        Decoded response object. An empty body yields an empty dict.

    Raises:
        SyncTransportError: If the endpoint cannot be reached.
        SyncProtocolError: For non-success status codes or non-object bodies.
    """
    try:
        response = session.request(method, url, json=dict(payload), timeout=timeout)
    except requests.RequestException as error:
        raise SyncTransportError(
            f"Failed to reach PPM endpoint {method} {url}: {error}. "
            "Check PPM_BASE_URL and network connectivity."
        ) from error
    try:
        if not 200 <= response.status_code < 300:
            raise SyncProtocolError(
                f"PPM endpoint {method} {url} returned HTTP {response.status_code}: "
                f"{_body_excerpt(response)}"
            )
        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError as error:
            raise SyncProtocolError(
                f"PPM endpoint {method} {url} returned a body that is not JSON: "
                f"{_body_excerpt(response)}"
            ) from error
    finally:
        response.close()
    if not isinstance(body, dict):
        raise SyncProtocolError(
            f"PPM endpoint {method} {url} returned {type(body).__name__}, expected JSON object."
        )
    return body


def _body_excerpt(response: Any, limit: int = 300) -> str:
    text = getattr(response, "text", "") or ""
    return text[:limit]

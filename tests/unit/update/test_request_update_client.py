"""Unit tests for the request update client."""

from __future__ import annotations

import pytest

from core.config import SyncConfig
from core.errors import SyncProtocolError, SyncValidationError
from core.types import ChangeSet, FieldChange
from tests.sync_fakes import FakeResponse, FakeSession
from update.request_update_client import RequestUpdateClient

_CONFIG = SyncConfig(base_url="https://ppm.example.com/itg/", username="u", password="p")
_CHANGE_SET = ChangeSet(changes=(FieldChange(token="ISPMO_PRJ_STATUS", value="Closed"),))


def test_update_request_puts_encoded_change_set() -> None:
    """Updates should PUT the encoded body to the request resource."""
    session = FakeSession(FakeResponse(body={"id": 40001}))

    response = RequestUpdateClient(_CONFIG, session).update_request("40001", _CHANGE_SET)

    assert response == {"id": 40001} and session.calls == [
        {
            "method": "PUT",
            "url": "https://ppm.example.com/itg/rest2/dm/requests/40001",
            "json": {
                "fields": {"field": [{"token": "REQD.ISPMO_PRJ_STATUS", "stringValue": ["Closed"]}]}
            },
            "timeout": 20.0,
        }
    ]


def test_update_request_accepts_empty_success_body() -> None:
    session = FakeSession(FakeResponse(status_code=204))

    assert RequestUpdateClient(_CONFIG, session).update_request("40001", _CHANGE_SET) == {}


def test_update_request_raises_protocol_error_on_rejection() -> None:
    response = FakeResponse(status_code=400, text="Field REQD.X is read-only")
    session = FakeSession(response)

    with pytest.raises(SyncProtocolError, match="HTTP 400"):
        RequestUpdateClient(_CONFIG, session).update_request("40001", _CHANGE_SET)

    assert response.closed


def test_update_request_rejects_non_numeric_id() -> None:
    session = FakeSession()

    with pytest.raises(SyncValidationError):
        RequestUpdateClient(_CONFIG, session).update_request("../admin", _CHANGE_SET)

    assert session.calls == []

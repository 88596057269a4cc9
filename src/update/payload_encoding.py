"""Wire encoding of change-sets for the PPM request REST API.

Header fields use the ``REQ.`` token prefix and detail fields ``REQD.``.
Timestamps are sent as ``dateValue``; all other values as a one-item
``stringValue`` list.
"""

from __future__ import annotations

from core.constants import DETAIL_FIELD_PREFIX, HEADER_FIELD_PREFIX, HEADER_FIELD_TOKENS
from core.types import ChangeSet, FieldChange


def encode_change_set(change_set: ChangeSet) -> dict[str, object]:
    """Encode a change-set into the request update body.

    Args:
        change_set: Ordered field changes.

    Returns:
        ``{"fields": {"field": [...]}}`` payload.
    """
    return {"fields": {"field": [encode_field_change(change) for change in change_set.changes]}}


def encode_field_change(change: FieldChange) -> dict[str, object]:
    """Encode one field change with its prefixed token."""
    token = prefixed_token(change.token)
    if change.kind == "date":
        return {"token": token, "dateValue": change.value}
    return {"token": token, "stringValue": [change.value]}


def prefixed_token(token: str) -> str:
    """Return the PPM field token with its header or detail prefix."""
    prefix = HEADER_FIELD_PREFIX if token in HEADER_FIELD_TOKENS else DETAIL_FIELD_PREFIX
    return f"{prefix}{token}"

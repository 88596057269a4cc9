"""Blank-equivalence helpers for PPM field values.

PPM returns missing values as JSON null, empty strings, padding
whitespace or the literal text ``null``. All of them mean "no value".
"""

from __future__ import annotations

from core.constants import NULL_LITERAL


def is_blank(value: object) -> bool:
    """Return True when a field value is absent or blank-equivalent.

    Args:
        value: Raw field value, usually a string or None.

    Returns:
        True for None, empty, whitespace-only, or ``null`` in any case.
    """
    if value is None:
        return True
    text = str(value).strip()
    return not text or text.lower() == NULL_LITERAL


def values_differ(left: str | None, right: str | None) -> bool:
    """Compare two field values case-insensitively.

    None only equals None.
    """
    if left is None or right is None:
        return left is not right
    return left.lower() != right.lower()


def normalize_token(token: str) -> str:
    """Normalize a field token or column header to its canonical key."""
    return token.strip().upper()

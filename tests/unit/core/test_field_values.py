"""Unit tests for blank-equivalence helpers."""

from __future__ import annotations

import pytest

from core.field_values import is_blank, normalize_token, values_differ


@pytest.mark.parametrize("value", [None, "", "   ", "null", "NULL", " Null "])
def test_is_blank_accepts_blank_equivalents(value: object) -> None:
    assert is_blank(value)


@pytest.mark.parametrize("value", ["0", "nullable", "-", 0])
def test_is_blank_rejects_real_values(value: object) -> None:
    assert not is_blank(value)


def test_values_differ_ignores_case() -> None:
    """Case-only differences should not count as a change."""
    assert not values_differ("Green", "GREEN") and values_differ("Green", "Red")


def test_values_differ_treats_none_as_distinct() -> None:
    assert values_differ(None, "") and not values_differ(None, None)


def test_normalize_token_strips_and_uppercases() -> None:
    assert normalize_token(" ispmo_prj_rag ") == "ISPMO_PRJ_RAG"

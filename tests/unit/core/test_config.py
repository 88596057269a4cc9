"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import SyncConfig, normalize_base_url, parse_failure_policy
from core.errors import SyncConfigError


def _clear_ppm_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PPM_BASE_URL",
        "PPM_USERNAME",
        "PPM_PASSWORD",
        "PPM_HTTP_TIMEOUT_SECONDS",
        "PPM_MILESTONE_HTML_MAX",
        "PPM_FAILURE_POLICY",
    ):
        monkeypatch.delenv(name, raising=False)


def test_from_env_reads_connection_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve connection settings and normalize the base URL."""
    _clear_ppm_env(monkeypatch)
    monkeypatch.setenv("PPM_BASE_URL", " https://ppm.example.com/itg ")
    monkeypatch.setenv("PPM_USERNAME", "svc_sync")
    monkeypatch.setenv("PPM_PASSWORD", "secret")

    config = SyncConfig.from_env()

    assert (
        config.base_url == "https://ppm.example.com/itg/"
        and config.username == "svc_sync"
        and config.http_timeout_seconds == 20.0
        and config.milestone_html_max == 4000
        and config.failure_policy == "abort"
    )


def test_from_env_reads_failure_policy_case_insensitively(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Failure policy names should be accepted in any case."""
    _clear_ppm_env(monkeypatch)
    monkeypatch.setenv("PPM_FAILURE_POLICY", "Continue")

    assert SyncConfig.from_env().failure_policy == "continue"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("PPM_HTTP_TIMEOUT_SECONDS", "soon"),
        ("PPM_HTTP_TIMEOUT_SECONDS", "0"),
        ("PPM_MILESTONE_HTML_MAX", "4k"),
        ("PPM_MILESTONE_HTML_MAX", "-1"),
        ("PPM_FAILURE_POLICY", "retry"),
    ],
)
def test_from_env_raises_for_invalid_values(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    """Config should fail for malformed numeric or policy values."""
    _clear_ppm_env(monkeypatch)
    monkeypatch.setenv(name, value)

    with pytest.raises(SyncConfigError):
        SyncConfig.from_env()


def test_require_connection_lists_missing_settings() -> None:
    """Missing credentials should be named in the error message."""
    config = SyncConfig(base_url="https://ppm.example.com/", username="", password="")

    with pytest.raises(SyncConfigError, match="PPM_USERNAME, PPM_PASSWORD"):
        config.require_connection()


def test_repr_hides_password() -> None:
    """Config repr should never contain the password."""
    config = SyncConfig(base_url="https://ppm.example.com/", username="u", password="hunter2")

    assert "hunter2" not in repr(config)


def test_normalize_base_url_keeps_empty_value() -> None:
    assert normalize_base_url("   ") == "" and normalize_base_url("http://h/") == "http://h/"


def test_parse_failure_policy_rejects_unknown_name() -> None:
    with pytest.raises(SyncConfigError):
        parse_failure_policy("skip")

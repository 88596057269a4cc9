"""Runtime configuration model for featuresync.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Literal, cast

from core.constants import (
    DEFAULT_FAILURE_POLICY,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_MILESTONE_HTML_MAX,
    SUPPORTED_FAILURE_POLICIES,
)
from core.errors import SyncConfigError

FailurePolicy = Literal["abort", "continue"]


@dataclass(frozen=True)
class SyncConfig:
    """Validated runtime configuration.

    Attributes:
        base_url: PPM base URL, always ending with a slash.
        username: PPM REST user name.
        password: PPM REST user password.
        http_timeout_seconds: Connect/read timeout for each collaborator call.
        milestone_html_max: Capacity of the milestone text-area field.
        failure_policy: ``abort`` stops the run on the first collaborator
            failure, ``continue`` records it and moves to the next feature.
    """

    base_url: str
    username: str
    password: str
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    milestone_html_max: int = DEFAULT_MILESTONE_HTML_MAX
    failure_policy: FailurePolicy = "abort"

    def __repr__(self) -> str:
        return (
            f"SyncConfig(base_url={self.base_url!r}, username={self.username!r}, "
            f"http_timeout_seconds={self.http_timeout_seconds}, "
            f"milestone_html_max={self.milestone_html_max}, "
            f"failure_policy={self.failure_policy!r})"
        )

    @classmethod
    def from_env(cls) -> "SyncConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            SyncConfigError: If environment values are invalid.
        """
        return cls(
            base_url=normalize_base_url(os.getenv("PPM_BASE_URL", "")),
            username=os.getenv("PPM_USERNAME", ""),
            password=os.getenv("PPM_PASSWORD", ""),
            http_timeout_seconds=_parse_timeout(
                os.getenv("PPM_HTTP_TIMEOUT_SECONDS", str(DEFAULT_HTTP_TIMEOUT_SECONDS))
            ),
            milestone_html_max=_parse_html_max(
                os.getenv("PPM_MILESTONE_HTML_MAX", str(DEFAULT_MILESTONE_HTML_MAX))
            ),
            failure_policy=parse_failure_policy(
                os.getenv("PPM_FAILURE_POLICY", DEFAULT_FAILURE_POLICY)
            ),
        )

    def require_connection(self) -> None:
        """Fail early when connection settings are incomplete.

        Raises:
            SyncConfigError: If base URL or credentials are missing.
        """
        missing = [
            name
            for name, value in (
                ("PPM_BASE_URL", self.base_url),
                ("PPM_USERNAME", self.username),
                ("PPM_PASSWORD", self.password),
            )
            if not value
        ]
        if missing:
            raise SyncConfigError(
                f"Missing PPM connection settings: {', '.join(missing)}. "
                "Export them in the environment or pass --base-url."
            )


def normalize_base_url(raw_value: str) -> str:
    """Strip whitespace and make sure a non-empty URL ends with a slash."""
    value = raw_value.strip()
    if value and not value.endswith("/"):
        value = f"{value}/"
    return value


def parse_failure_policy(raw_value: str) -> FailurePolicy:
    """Parse a failure policy name.

    Raises:
        SyncConfigError: If the policy is not supported.
    """
    value = raw_value.strip().lower()
    if value in SUPPORTED_FAILURE_POLICIES:
        return cast(FailurePolicy, value)
    raise SyncConfigError(
        f"Invalid PPM_FAILURE_POLICY value '{raw_value}'. "
        f"Use one of: {', '.join(SUPPORTED_FAILURE_POLICIES)}."
    )


def _parse_timeout(raw_value: str) -> float:
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise SyncConfigError(
            "Invalid PPM_HTTP_TIMEOUT_SECONDS value: "
            f"expected number, got '{raw_value}'. "
            "Set PPM_HTTP_TIMEOUT_SECONDS to a positive number of seconds."
        ) from error
    if timeout <= 0:
        raise SyncConfigError(
            f"Invalid PPM_HTTP_TIMEOUT_SECONDS value {timeout}: must be greater than zero."
        )
    return timeout


def _parse_html_max(raw_value: str) -> int:
    try:
        html_max = int(raw_value)
    except ValueError as error:
        raise SyncConfigError(
            "Invalid PPM_MILESTONE_HTML_MAX value: "
            f"expected integer, got '{raw_value}'. "
            "Set PPM_MILESTONE_HTML_MAX to the milestone field capacity."
        ) from error
    if html_max <= 0:
        raise SyncConfigError(
            f"Invalid PPM_MILESTONE_HTML_MAX value {html_max}: must be greater than zero."
        )
    return html_max

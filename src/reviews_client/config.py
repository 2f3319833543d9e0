"""Client configuration.

`ClientConfig` is what a `ReviewsClient` runs with. It can be built directly or read
from environment variables with `get_config()`. For local development, a `.env` file
in the working directory is loaded first (if present).

IMPORTANT:
- Do NOT commit `.env` to git, it holds the API key.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Union

from dotenv import load_dotenv

from .errors import CONFIGURATION_ERROR, ReviewsError


DEFAULT_TIMEOUT_MS = 30000
DEFAULT_USER_AGENT = "reviews-client/0.1"

Number = Union[int, float]


def validate_config(api_key: Optional[str], base_url: Optional[str], timeout_ms: Optional[Number] = None) -> None:
    """Reject a configuration the client cannot work with.

    A `timeout_ms` of None means "not given" and is accepted (the default applies).
    """

    if not api_key:
        raise ReviewsError(
            "API key is required",
            CONFIGURATION_ERROR,
            "Provide api_key when constructing the client",
        )
    if not base_url:
        raise ReviewsError(
            "Base URL is required",
            CONFIGURATION_ERROR,
            "Provide base_url when constructing the client",
        )
    if timeout_ms is not None:
        if isinstance(timeout_ms, bool) or not isinstance(timeout_ms, (int, float)) or timeout_ms <= 0:
            raise ReviewsError(
                "Invalid timeout value",
                CONFIGURATION_ERROR,
                "Timeout must be a positive number of milliseconds",
            )


@dataclass(frozen=True)
class ClientConfig:
    """Immutable settings shared by every call a client makes."""

    api_key: str
    base_url: str
    timeout_ms: Number = DEFAULT_TIMEOUT_MS
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def create(
        cls,
        *,
        api_key: Optional[str],
        base_url: Optional[str],
        timeout_ms: Optional[Number] = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> "ClientConfig":
        """Validate the raw values and build a config, filling in the default timeout."""

        validate_config(api_key, base_url, timeout_ms)
        return cls(
            api_key=api_key,  # type: ignore[arg-type]
            base_url=base_url.rstrip("/"),  # type: ignore[union-attr]
            timeout_ms=DEFAULT_TIMEOUT_MS if timeout_ms is None else timeout_ms,
            user_agent=user_agent,
        )

    @property
    def timeout_seconds(self) -> float:
        return float(self.timeout_ms) / 1000.0


def _as_int(value: str, *, name: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise ReviewsError(
            "Invalid timeout value",
            CONFIGURATION_ERROR,
            f"Environment variable {name} must be an integer. Got: {value!r}",
            cause=exc,
        ) from exc


_CONFIG: Optional[ClientConfig] = None


def get_config(*, reload: bool = False) -> ClientConfig:
    """Load and return a ClientConfig from the environment (cached by default)."""

    global _CONFIG
    if _CONFIG is not None and not reload:
        return _CONFIG

    # Load .env if available (does nothing if missing)
    load_dotenv()

    timeout_raw = os.getenv("REVIEWS_TIMEOUT_MS")
    timeout_ms = _as_int(timeout_raw, name="REVIEWS_TIMEOUT_MS") if timeout_raw and timeout_raw.strip() else None

    _CONFIG = ClientConfig.create(
        api_key=os.getenv("REVIEWS_API_KEY"),
        base_url=os.getenv("REVIEWS_BASE_URL"),
        timeout_ms=timeout_ms,
        user_agent=os.getenv("REVIEWS_USER_AGENT") or DEFAULT_USER_AGENT,
    )
    return _CONFIG

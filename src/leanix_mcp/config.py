# LeanIX MCP Server
# File: config.py
# Version: v1

"""Configuration loading for the LeanIX MCP Server."""

from __future__ import annotations

from dataclasses import dataclass
import os

from .errors import ConfigurationError


def _parse_bool_env(name: str, default: bool = False) -> bool:
    """Parse a boolean-like environment variable.

    Accepts 1/0, true/false, yes/no, on/off (case-insensitive).
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "on"}


def _parse_int_env(
    name: str,
    default: int,
    min_value: int | None = None,
    max_value: int | None = None,
) -> int:
    """Parse an int environment variable with clamping and safe fallback."""
    raw = os.getenv(name)
    if raw is None or not str(raw).strip():
        value = int(default)
    else:
        try:
            value = int(str(raw).strip())
        except ValueError:
            value = int(default)

    if min_value is not None and value < min_value:
        value = min_value
    if max_value is not None and value > max_value:
        value = max_value

    return value


@dataclass
class LeanIXConfig:
    """Configuration values required to talk to a LeanIX workspace.

    The subdomain selects the tenant host (``https://<subdomain>.leanix.net``)
    and the API token is exchanged for short-lived bearer tokens.
    """

    subdomain: str | None
    api_token: str | None

    default_page_size: int = 50
    timeout_seconds: int = 30
    verify_tls: bool = True
    host: str = "leanix.net"

    @property
    def base_url(self) -> str:
        return f"https://{self.subdomain}.{self.host}"

    @property
    def token_url(self) -> str:
        return f"{self.base_url}/services/mtm/v1/oauth2/token"

    @property
    def graphql_url(self) -> str:
        return f"{self.base_url}/services/pathfinder/v1/graphql"

    def validate(self) -> "LeanIXConfig":
        """Fail fast on blank credentials or a non-positive page size."""
        if not self.subdomain or not self.subdomain.strip():
            raise ConfigurationError(
                "LeanIX subdomain is required. Set LEANIX_SUBDOMAIN."
            )
        if not self.api_token or not self.api_token.strip():
            raise ConfigurationError(
                "LeanIX API token is required. Set LEANIX_API_TOKEN."
            )
        if int(self.default_page_size) < 1:
            raise ConfigurationError(
                f"Default page size must be a positive integer, got {self.default_page_size}."
            )
        return self

    @classmethod
    def from_env(cls) -> "LeanIXConfig":
        """Create configuration from environment variables."""
        subdomain = os.getenv("LEANIX_SUBDOMAIN")
        api_token = os.getenv("LEANIX_API_TOKEN")

        default_page_size = _parse_int_env(
            "LEANIX_DEFAULT_PAGE_SIZE", default=50, min_value=1, max_value=10000
        )
        timeout_seconds = _parse_int_env(
            "LEANIX_TIMEOUT_SECONDS", default=30, min_value=1, max_value=600
        )
        verify_tls = _parse_bool_env("LEANIX_VERIFY_TLS", default=True)
        host = (os.getenv("LEANIX_HOST") or "").strip() or "leanix.net"

        return cls(
            subdomain=subdomain.strip() if subdomain else subdomain,
            api_token=api_token,
            default_page_size=default_page_size,
            timeout_seconds=timeout_seconds,
            verify_tls=verify_tls,
            host=host,
        )

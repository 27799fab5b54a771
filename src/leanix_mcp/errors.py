# LeanIX MCP Server
# File: errors.py
# Version: v1

"""Error taxonomy for the LeanIX MCP Server.

Every error raised by this package derives from :class:`LeanIXError` so the
tool boundary can report them uniformly. Upstream HTTP failures carry the
status code and a short body snippet for diagnosis.
"""

from __future__ import annotations

from typing import Optional


class LeanIXError(RuntimeError):
    """Base class for all LeanIX MCP errors."""


class ConfigurationError(LeanIXError):
    """Blank or missing configuration detected before any network call."""


class _UpstreamError(LeanIXError):
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body_snippet: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_snippet = body_snippet


class AuthError(_UpstreamError):
    """The OAuth2 token endpoint failed or returned an unusable payload."""


class QueryError(_UpstreamError):
    """The GraphQL endpoint failed or returned a body that is not JSON."""


class ValidationError(LeanIXError, ValueError):
    """A required caller-supplied parameter was missing or blank."""


class MappingError(LeanIXError):
    """A response node could not be converted into a FactSheet."""

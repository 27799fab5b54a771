# LeanIX MCP Server
# File: auth.py
# Version: v1

"""OAuth2 client for obtaining access tokens for LeanIX."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional
import base64
import logging

import httpx
from httpx import RequestError

from .config import LeanIXConfig
from .errors import AuthError

logger = logging.getLogger(__name__)


@dataclass
class OAuthClient:
    """OAuth2 client using the client-credentials flow.

    LeanIX API tokens are exchanged by sending ``apitoken:<token>`` via HTTP
    Basic authentication; the request body only contains grant_type.

    No token is cached: every call performs a fresh round trip.
    """

    config: LeanIXConfig
    http_client: Optional[httpx.AsyncClient] = None

    def __post_init__(self) -> None:
        self.config.validate()

    def basic_authorization(self) -> str:
        """Return the ``Authorization`` header value for the token endpoint."""
        raw_credentials = f"apitoken:{self.config.api_token}"
        basic_token = base64.b64encode(raw_credentials.encode("utf-8")).decode("ascii")
        return f"Basic {basic_token}"

    async def get_access_token(self) -> str:
        """Exchange the configured API token for a bearer access token."""
        url = self.config.token_url
        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
            "Authorization": self.basic_authorization(),
        }
        form = {"grant_type": "client_credentials"}

        logger.info("Requesting access token from %s", url)
        logger.debug(
            "Using API token: %s",
            "******** (present)" if self.config.api_token else "MISSING",
        )

        try:
            if self.http_client is not None:
                response = await self.http_client.post(url, data=form, headers=headers)
            else:
                async with httpx.AsyncClient(
                    timeout=float(self.config.timeout_seconds),
                    verify=self.config.verify_tls,
                ) as client:
                    response = await client.post(url, data=form, headers=headers)
        except RequestError as exc:
            logger.error("Error calling LeanIX token endpoint at %s: %s", url, exc)
            raise AuthError(
                f"Error calling LeanIX token endpoint at '{url}': {exc}"
            ) from exc

        if not response.is_success:
            status = response.status_code
            body_preview = response.text[:500]
            logger.error(
                "Failed to obtain access token. Status: %s, Body: %s",
                status,
                body_preview,
            )
            raise AuthError(
                f"Failed to obtain access token from '{url}' (HTTP {status}). "
                "Check LEANIX_SUBDOMAIN and LEANIX_API_TOKEN. "
                f"Response snippet: {body_preview}",
                status_code=status,
                body_snippet=body_preview,
            )

        try:
            data: Any = response.json()
        except ValueError as exc:
            raise AuthError(
                f"OAuth token response from '{url}' is not valid JSON "
                f"(HTTP {response.status_code}).",
                status_code=response.status_code,
                body_snippet=response.text[:500],
            ) from exc

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token or not isinstance(token, str):
            raise AuthError(
                "OAuth token response did not contain 'access_token'",
                status_code=response.status_code,
            )

        logger.debug("Successfully obtained access token")
        return token

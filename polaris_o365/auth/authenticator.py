"""
Authentication module: exchanges a username/password for a Polaris bearer token.

    POST {base_url}/api/session
    Body: {"username": "...", "password": "..."}
    Response: {"access_token": "...", ...}

The token is returned to the caller and passed explicitly to every client.
It is never refreshed here; expiry is the caller's concern.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..config import ClientConfig
from ..errors import PolarisError
from ..graph.client import build_headers, build_timeout, resolve_config, wrap_http_error

logger = logging.getLogger("polaris_o365.auth")


class AuthenticationError(PolarisError):
    """Raised when the credential exchange fails."""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class Authenticator:
    """
    Handles session-token acquisition against the Polaris session endpoint.
    Supports sync (httpx.Client) and async (httpx.AsyncClient) flows.
    """

    def __init__(
        self,
        base_url: str = "",
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not (base_url or (config and config.base_url)):
            raise AuthenticationError("A base URL is required for authentication.")
        self.config = resolve_config(base_url, config)
        self._transport = transport
        self._async_transport = async_transport
        self._access_token: Optional[str] = None

    def acquire_token(self, username: str, password: str) -> str:
        """Acquire a bearer token with a blocking request."""
        payload = self._credentials(username, password)
        url = self.config.session_url
        logger.info(f"Authenticating to {self.config.base_url} as {username}...")

        try:
            with httpx.Client(
                timeout=build_timeout(self.config),
                headers=build_headers(),
                transport=self._transport,
            ) as client:
                response = client.post(url, json=payload)
        except httpx.HTTPError as e:
            raise wrap_http_error(e, url) from e

        return self._store(self._parse_token(response))

    async def acquire_token_async(self, username: str, password: str) -> str:
        """Acquire a bearer token without blocking the event loop."""
        payload = self._credentials(username, password)
        url = self.config.session_url
        logger.info(f"Authenticating to {self.config.base_url} as {username}...")

        try:
            async with httpx.AsyncClient(
                timeout=build_timeout(self.config),
                headers=build_headers(),
                transport=self._async_transport,
            ) as client:
                response = await client.post(url, json=payload)
        except httpx.HTTPError as e:
            raise wrap_http_error(e, url) from e

        return self._store(self._parse_token(response))

    @staticmethod
    def _credentials(username: str, password: str) -> dict:
        if not username or not password:
            raise AuthenticationError("Username and password must both be provided.")
        return {"username": username, "password": password}

    @staticmethod
    def _parse_token(response: httpx.Response) -> str:
        if not response.is_success:
            raise AuthenticationError(
                f"Authentication failed: HTTP {response.status_code} {response.text[:200]}",
                status_code=response.status_code,
            )
        try:
            body = response.json()
        except ValueError as e:
            raise AuthenticationError(
                f"Authentication response is not valid JSON: {e}",
                status_code=response.status_code,
            ) from e

        token = body.get("access_token") if isinstance(body, dict) else None
        if not token or not isinstance(token, str):
            raise AuthenticationError(
                "Authentication response did not contain an access_token.",
                status_code=response.status_code,
            )
        return token

    def _store(self, token: str) -> str:
        self._access_token = token
        logger.info("Authentication successful.")
        return token

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token


def get_token(
    username: str,
    password: str,
    base_url: str,
    config: Optional[ClientConfig] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> str:
    """Exchange credentials for a bearer token in a single call."""
    return Authenticator(base_url, config=config, transport=transport).acquire_token(
        username, password
    )

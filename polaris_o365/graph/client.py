"""
Polaris GraphQL transport: sync and async httpx clients.
Every operation is a POST to {base_url}/api/graphql carrying a bearer token.
No retries are performed; failures surface to the caller as typed errors.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Optional

import httpx

from ..config import ClientConfig
from ..errors import PolarisError

logger = logging.getLogger("polaris_o365.graph")


class TransportError(PolarisError):
    """Raised on network failure, non-2xx status, or an undecodable response body."""
    def __init__(self, status_code: Optional[int], message: str, url: str):
        self.status_code = status_code
        self.url = url
        prefix = f"HTTP {status_code}" if status_code is not None else "Transport error"
        super().__init__(f"{prefix} for {url}: {message}")


class GraphQLError(PolarisError):
    """Raised when a GraphQL payload carries top-level errors or no data object."""
    def __init__(self, errors: list, payload: Any, operation_name: Optional[str] = None):
        self.errors = errors
        self.payload = payload
        self.operation_name = operation_name
        messages = "; ".join(
            e.get("message", str(e)) if isinstance(e, dict) else str(e)
            for e in errors
        ) or "response contained no data"
        super().__init__(f"GraphQL errors in {operation_name or 'query'}: {messages}")


def build_headers(access_token: Optional[str] = None) -> dict[str, str]:
    """Compose request headers from explicit inputs; the bearer header is added only with a token."""
    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    return headers


def build_timeout(config: ClientConfig) -> httpx.Timeout:
    return httpx.Timeout(config.timeout, connect=config.connect_timeout)


def resolve_config(base_url: str, config: Optional[ClientConfig]) -> ClientConfig:
    """Merge an explicit base URL over an optional config object."""
    config = config or ClientConfig()
    if base_url:
        config = dataclasses.replace(config, base_url=base_url)
    if not config.base_url:
        raise ValueError("A base URL is required (pass base_url or config.base_url).")
    return config


def graphql_body(
    query: str,
    variables: Optional[dict] = None,
    operation_name: Optional[str] = None,
) -> dict:
    body: dict[str, Any] = {"query": query, "variables": variables or {}}
    if operation_name:
        body["operationName"] = operation_name
    return body


def decode_response(response: httpx.Response, url: str) -> dict:
    """Turn an httpx response into a JSON object or raise TransportError."""
    if not response.is_success:
        raise TransportError(response.status_code, response.text[:200], url)
    try:
        payload = response.json()
    except ValueError as e:
        raise TransportError(response.status_code, f"Malformed JSON: {e}", url) from e
    if not isinstance(payload, dict):
        raise TransportError(
            response.status_code,
            f"Expected a JSON object, got {type(payload).__name__}",
            url,
        )
    return payload


def wrap_http_error(error: httpx.HTTPError, url: str) -> TransportError:
    if isinstance(error, httpx.TimeoutException):
        return TransportError(None, f"Timed out: {error}", url)
    return TransportError(None, f"{type(error).__name__}: {error}", url)


def extract_data(payload: dict, operation_name: Optional[str] = None) -> dict:
    """Return payload["data"], raising GraphQLError on top-level errors or missing data."""
    errors = payload.get("errors")
    if errors:
        raise GraphQLError(errors if isinstance(errors, list) else [errors], payload, operation_name)
    data = payload.get("data")
    if not isinstance(data, dict):
        raise GraphQLError([], payload, operation_name)
    return data


class PolarisClient:
    """
    Synchronous Polaris GraphQL client.

    Usage:
        with PolarisClient(token, "https://polaris.example.test") as client:
            payload = client.execute(query, variables, "SLAList")
    """

    def __init__(
        self,
        access_token: str,
        base_url: str = "",
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.access_token = access_token
        self.config = resolve_config(base_url, config)
        self._transport = transport
        self._request_count = 0
        self._client: Optional[httpx.Client] = None

    def __enter__(self):
        self._client = httpx.Client(
            timeout=build_timeout(self.config),
            headers=build_headers(self.access_token),
            transport=self._transport,
        )
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        if self._client:
            self._client.close()
            self._client = None

    @property
    def graphql_url(self) -> str:
        return self.config.graphql_url

    def execute(
        self,
        query: str,
        variables: Optional[dict] = None,
        operation_name: Optional[str] = None,
    ) -> dict:
        """Execute one GraphQL request and return the full decoded payload."""
        if not self._client:
            raise RuntimeError("PolarisClient not initialized. Use 'with' context.")

        url = self.graphql_url
        logger.debug(f"POST {url} operation={operation_name} variables={variables}")
        try:
            response = self._client.post(url, json=graphql_body(query, variables, operation_name))
        except httpx.HTTPError as e:
            raise wrap_http_error(e, url) from e
        self._request_count += 1
        return decode_response(response, url)

    def execute_data(
        self,
        query: str,
        variables: Optional[dict] = None,
        operation_name: Optional[str] = None,
    ) -> dict:
        """Execute and return only the `data` object."""
        return extract_data(self.execute(query, variables, operation_name), operation_name)

    def get_stats(self) -> dict:
        return {"total_requests": self._request_count}


class AsyncPolarisClient:
    """
    Async twin of PolarisClient. Requests within one operation still run
    strictly one after another.
    """

    def __init__(
        self,
        access_token: str,
        base_url: str = "",
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.access_token = access_token
        self.config = resolve_config(base_url, config)
        self._transport = transport
        self._request_count = 0
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            timeout=build_timeout(self.config),
            headers=build_headers(self.access_token),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args):
        await self.aclose()

    async def aclose(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def graphql_url(self) -> str:
        return self.config.graphql_url

    async def execute(
        self,
        query: str,
        variables: Optional[dict] = None,
        operation_name: Optional[str] = None,
    ) -> dict:
        if not self._client:
            raise RuntimeError("AsyncPolarisClient not initialized. Use 'async with' context.")

        url = self.graphql_url
        logger.debug(f"POST {url} operation={operation_name} variables={variables}")
        try:
            response = await self._client.post(
                url, json=graphql_body(query, variables, operation_name)
            )
        except httpx.HTTPError as e:
            raise wrap_http_error(e, url) from e
        self._request_count += 1
        return decode_response(response, url)

    async def execute_data(
        self,
        query: str,
        variables: Optional[dict] = None,
        operation_name: Optional[str] = None,
    ) -> dict:
        payload = await self.execute(query, variables, operation_name)
        return extract_data(payload, operation_name)

    def get_stats(self) -> dict:
        return {"total_requests": self._request_count}

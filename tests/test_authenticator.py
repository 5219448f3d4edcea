"""Tests for polaris_o365.auth.Authenticator.

All HTTP goes through httpx.MockTransport; no real network calls are made.
"""

import asyncio

import httpx
import pytest

from polaris_o365.auth import Authenticator, AuthenticationError, get_token
from polaris_o365.graph import TransportError

BASE_URL = "https://example.test"


# ---------------------------------------------------------------------------
# Token acquisition
# ---------------------------------------------------------------------------

def test_get_token_posts_credentials_to_session_endpoint(fake_server):
    server = fake_server({"access_token": "tok-123", "userId": "u1"})

    token = get_token("admin@example.test", "s3cret", BASE_URL + "/", transport=server.transport)

    assert token == "tok-123"
    assert len(server.requests) == 1
    request = server.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://example.test/api/session"
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["Accept"] == "application/json"
    assert "Authorization" not in request.headers
    assert server.bodies[0] == {"username": "admin@example.test", "password": "s3cret"}


def test_access_token_property(fake_server):
    server = fake_server({"access_token": "tok-123"})
    auth = Authenticator(BASE_URL, transport=server.transport)
    assert auth.access_token is None
    auth.acquire_token("user", "pw")
    assert auth.access_token == "tok-123"


def test_acquire_token_async(fake_server):
    server = fake_server({"access_token": "tok-async"})
    auth = Authenticator(BASE_URL, async_transport=server.transport)

    token = asyncio.run(auth.acquire_token_async("user", "pw"))

    assert token == "tok-async"
    assert server.bodies[0] == {"username": "user", "password": "pw"}


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("status", [400, 401, 403, 500])
def test_non_2xx_raises_authentication_error(fake_server, status):
    server = fake_server(httpx.Response(status, json={"message": "nope"}))
    with pytest.raises(AuthenticationError) as exc_info:
        get_token("user", "pw", BASE_URL, transport=server.transport)
    assert exc_info.value.status_code == status


@pytest.mark.parametrize("body", [
    {},
    {"access_token": ""},
    {"access_token": None},
    ["access_token"],
])
def test_missing_token_raises_authentication_error(fake_server, body):
    server = fake_server(httpx.Response(200, json=body))
    with pytest.raises(AuthenticationError):
        get_token("user", "pw", BASE_URL, transport=server.transport)


def test_invalid_json_raises_authentication_error(fake_server):
    server = fake_server(httpx.Response(200, content=b"<html>login</html>"))
    with pytest.raises(AuthenticationError):
        get_token("user", "pw", BASE_URL, transport=server.transport)


@pytest.mark.parametrize("username,password", [("", "pw"), ("user", "")])
def test_empty_credentials_rejected_before_request(fake_server, username, password):
    server = fake_server()
    with pytest.raises(AuthenticationError):
        get_token(username, password, BASE_URL, transport=server.transport)
    assert server.requests == []


def test_empty_base_url_rejected():
    with pytest.raises(AuthenticationError):
        Authenticator("")


def test_connection_failure_is_transport_error(fake_server):
    server = fake_server(httpx.ConnectError("connection refused"))
    with pytest.raises(TransportError) as exc_info:
        get_token("user", "pw", BASE_URL, transport=server.transport)
    assert exc_info.value.status_code is None
    assert exc_info.value.url == "https://example.test/api/session"

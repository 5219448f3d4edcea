"""Tests for polaris_o365.graph.client.PolarisClient (sync transport)."""

import httpx
import pytest

from polaris_o365.config import ClientConfig
from polaris_o365.graph import GraphQLError, PolarisClient, TransportError, build_headers

BASE_URL = "https://example.test"
TOKEN = "abc"


def _client(server, **kwargs):
    return PolarisClient(TOKEN, BASE_URL, transport=server.transport, **kwargs)


# ---------------------------------------------------------------------------
# Request shape
# ---------------------------------------------------------------------------

def test_build_headers():
    assert build_headers("abc") == {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "Authorization": "Bearer abc",
    }
    assert "Authorization" not in build_headers()


def test_execute_posts_graphql_body_with_bearer(fake_server):
    server = fake_server({"data": {"ok": True}})

    with _client(server) as client:
        payload = client.execute("query X { ok }", {"a": 1}, "X")

    assert payload == {"data": {"ok": True}}
    request = server.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://example.test/api/graphql"
    assert request.headers["Authorization"] == "Bearer abc"
    assert request.headers["Accept"] == "application/json"
    assert server.bodies[0] == {
        "query": "query X { ok }",
        "variables": {"a": 1},
        "operationName": "X",
    }


def test_base_url_from_config(fake_server):
    server = fake_server({"data": {}})
    config = ClientConfig(base_url="https://cfg.test/")
    with PolarisClient(TOKEN, config=config, transport=server.transport) as client:
        client.execute("query X { ok }")
    assert str(server.requests[0].url) == "https://cfg.test/api/graphql"


def test_missing_base_url_rejected():
    with pytest.raises(ValueError):
        PolarisClient(TOKEN)


def test_execute_outside_context_raises():
    client = PolarisClient(TOKEN, BASE_URL)
    with pytest.raises(RuntimeError):
        client.execute("query X { ok }")


def test_get_stats_counts_requests(fake_server):
    server = fake_server({"data": {}}, {"data": {}})
    with _client(server) as client:
        client.execute("q")
        client.execute("q")
        assert client.get_stats() == {"total_requests": 2}


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class TestTransportErrors:

    def test_non_2xx_status(self, fake_server):
        server = fake_server(httpx.Response(502, text="bad gateway"))
        with _client(server) as client:
            with pytest.raises(TransportError) as exc_info:
                client.execute("q")
        assert exc_info.value.status_code == 502
        assert exc_info.value.url == "https://example.test/api/graphql"

    def test_malformed_json(self, fake_server):
        server = fake_server(httpx.Response(200, content=b"not json"))
        with _client(server) as client:
            with pytest.raises(TransportError):
                client.execute("q")

    def test_non_object_json(self, fake_server):
        server = fake_server(httpx.Response(200, json=[1, 2, 3]))
        with _client(server) as client:
            with pytest.raises(TransportError):
                client.execute("q")

    def test_timeout(self, fake_server):
        server = fake_server(httpx.ReadTimeout("slow"))
        with _client(server) as client:
            with pytest.raises(TransportError) as exc_info:
                client.execute("q")
        assert exc_info.value.status_code is None
        assert "Timed out" in str(exc_info.value)

    def test_no_retry_after_failure(self, fake_server):
        server = fake_server(httpx.Response(503), {"data": {}})
        with _client(server) as client:
            with pytest.raises(TransportError):
                client.execute("q")
        assert len(server.requests) == 1


class TestExecuteData:

    def test_returns_data(self, fake_server):
        server = fake_server({"data": {"x": 1}})
        with _client(server) as client:
            assert client.execute_data("q") == {"x": 1}

    def test_graphql_errors_raise(self, fake_server):
        payload = {"errors": [{"message": "Field 'foo' missing"}], "data": None}
        server = fake_server(payload)
        with _client(server) as client:
            with pytest.raises(GraphQLError) as exc_info:
                client.execute_data("q", operation_name="SLAList")
        assert exc_info.value.payload == payload
        assert "Field 'foo' missing" in str(exc_info.value)
        assert exc_info.value.operation_name == "SLAList"

    def test_missing_data_raises(self, fake_server):
        server = fake_server({"data": None})
        with _client(server) as client:
            with pytest.raises(GraphQLError):
                client.execute_data("q")

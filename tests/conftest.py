"""Shared fixtures: an in-process fake Polaris server built on httpx.MockTransport."""

import json

import httpx
import pytest


class FakePolaris:
    """Replays queued responses and records every request it receives.

    Queue items may be a dict (sent as a 200 JSON body), an httpx.Response,
    or an exception instance (raised as a transport failure).
    """

    def __init__(self, responses):
        self._responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected extra request to {request.url}")
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        if isinstance(item, httpx.Response):
            return item
        return httpx.Response(200, json=item)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def bodies(self):
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def fake_server():
    """Factory: fake_server(response1, response2, ...) -> FakePolaris."""
    def _make(*responses):
        return FakePolaris(responses)
    return _make


@pytest.fixture
def connection_page():
    """Factory building a GraphQL payload whose data holds a connection at `path`."""
    def _make(path, nodes, end_cursor=None, has_next=False):
        conn = {
            "edges": [{"node": n} for n in nodes],
            "pageInfo": {"endCursor": end_cursor, "hasNextPage": has_next},
        }
        for key in reversed(path):
            conn = {key: conn}
        return {"data": conn}
    return _make

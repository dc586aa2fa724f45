"""Shared fixtures: a Client wired to an in-process mock backend."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from fakewebservices.client import Client

HOSTNAME = "example.test"
TOKEN = "secret-token"
BASE_URL = f"https://{HOSTNAME}/api/fake-resources/"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_client():
    """Return a factory building a Client whose requests go to ``handler``."""
    clients: list[Client] = []

    def _make(handler: Handler, transport: httpx.BaseTransport | None = None) -> Client:
        client = Client(
            HOSTNAME,
            TOKEN,
            transport=transport or httpx.MockTransport(handler),
        )
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def jsonapi_response():
    """Return a builder for ``application/vnd.api+json`` responses."""

    def _build(
        status_code: int,
        data: object,
        meta: dict | None = None,
    ) -> httpx.Response:
        body: dict = {"data": data}
        if meta is not None:
            body["meta"] = meta
        return httpx.Response(
            status_code,
            json=body,
            headers={"Content-Type": "application/vnd.api+json"},
        )

    return _build

"""Pytest configuration and fixtures."""

import json
import logging
from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio
import structlog

from ratesview.graphql import GraphQLClient, build_client

ENDPOINT = "https://rates.test/graphql"


class FakeGraphQLServer:
    """Stands in for the GraphQL endpoint behind an httpx.MockTransport.

    Answers every request with ``respond(request)``; by default a 200 with
    ``body``. Records the decoded request bodies and headers.
    """

    def __init__(self, body: dict[str, Any] | None = None) -> None:
        self.body = body if body is not None else {"data": {"rates": []}}
        self.respond: Callable[[httpx.Request], Any] | None = None
        self.requests: list[dict[str, Any]] = []
        self.headers: list[httpx.Headers] = []
        self.transport = httpx.MockTransport(self._handle)

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        self.headers.append(request.headers)
        if self.respond is not None:
            response = self.respond(request)
            if not isinstance(response, httpx.Response):
                response = await response
            return response
        return httpx.Response(200, json=self.body)


@pytest.fixture
def rates_payload() -> dict[str, Any]:
    """Two-rate GetExchangeRates response body."""
    return {
        "data": {
            "rates": [
                {"currency": "USD", "rate": 1, "name": "US Dollar"},
                {"currency": "EUR", "rate": 0.9, "name": "Euro"},
            ]
        }
    }


@pytest.fixture
def server(rates_payload: dict[str, Any]) -> FakeGraphQLServer:
    """Fake endpoint serving the two-rate payload."""
    return FakeGraphQLServer(rates_payload)


@pytest_asyncio.fixture
async def client(server: FakeGraphQLServer) -> AsyncIterator[GraphQLClient]:
    """Cache-first client wired to the fake endpoint."""
    client = build_client(ENDPOINT, transport=server.transport, fetch_policy="cache-first")
    yield client
    await client.aclose()


def refuse_connection(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Connection refused", request=request)


@pytest.fixture
def make_server() -> Callable[..., FakeGraphQLServer]:
    """Factory for fake endpoints with a custom body."""
    return FakeGraphQLServer


@pytest.fixture
def refused_server() -> FakeGraphQLServer:
    """Fake endpoint whose every connection is refused."""
    server = FakeGraphQLServer()
    server.respond = refuse_connection
    return server


@pytest.fixture
def endpoint() -> str:
    return ENDPOINT


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so they don't outlive the test."""
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()

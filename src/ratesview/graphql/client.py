"""GraphQL client: link chain plus a query cache."""

import asyncio
from collections.abc import Iterable, Mapping
from typing import Any

import httpx

from ratesview.core.config import FetchPolicy, get_settings
from ratesview.core.exceptions import (
    ConfigurationError,
    GraphQLResponseError,
    ProtocolError,
)
from ratesview.core.interfaces import ILink
from ratesview.core.logging import get_logger
from ratesview.graphql.handle import QueryHandle
from ratesview.graphql.links import HttpLink, LinkChain
from ratesview.infrastructure.cache import QueryCache
from ratesview.models.query import Operation, QueryDefinition
from ratesview.models.state import QueryState

FETCH_POLICIES: tuple[str, ...] = ("cache-first", "network-only", "no-cache")


class GraphQLClient:
    """Executes queries through a link chain, answering from cache when allowed."""

    def __init__(
        self,
        link: LinkChain,
        cache: QueryCache | None = None,
        fetch_policy: FetchPolicy = "cache-first",
    ) -> None:
        if fetch_policy not in FETCH_POLICIES:
            raise ConfigurationError(f"Unknown fetch policy: {fetch_policy}")
        self.link = link
        self.cache = cache if cache is not None else QueryCache()
        self.fetch_policy = fetch_policy
        self.logger = get_logger("graphql_client")

    async def __aenter__(self) -> "GraphQLClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    def execute(
        self,
        query: QueryDefinition,
        variables: Mapping[str, Any] | None = None,
        fetch_policy: FetchPolicy | None = None,
    ) -> QueryHandle:
        """Start a query and return its handle without waiting for the response.

        Must be called with an event loop running. A cache-first hit returns
        a handle that is already in SUCCESS.
        """
        policy = fetch_policy or self.fetch_policy
        if policy not in FETCH_POLICIES:
            raise ConfigurationError(f"Unknown fetch policy: {policy}")

        operation = Operation(query=query, variables=dict(variables or {}))
        signature = operation.signature

        if policy == "cache-first":
            cached = self.cache.read(signature)
            if cached is not None:
                self.logger.debug(
                    "query_cache_hit",
                    operation=query.operation_name,
                    signature=signature[:12],
                )
                return QueryHandle(operation, QueryState.succeeded(cached, from_cache=True))

        loop = asyncio.get_running_loop()
        handle = QueryHandle(operation)
        handle.start(self._fetch(handle, policy), loop=loop)
        return handle

    async def query(
        self,
        query: QueryDefinition,
        variables: Mapping[str, Any] | None = None,
        fetch_policy: FetchPolicy | None = None,
    ) -> QueryState:
        """Execute a query and wait for its terminal state."""
        return await self.execute(query, variables, fetch_policy)

    async def _fetch(self, handle: QueryHandle, policy: str) -> None:
        operation = handle.operation
        signature = operation.signature

        self.logger.info(
            "query_started",
            operation=operation.query.operation_name,
            signature=signature[:12],
            fetch_policy=policy,
        )

        try:
            body = await self.link.execute(operation)
            data = extract_data(body)
        except Exception as e:
            # Every failure kind ends the query in FAILED with the error attached.
            self.logger.warning(
                "query_failed",
                operation=operation.query.operation_name,
                error=str(e),
                error_type=type(e).__name__,
            )
            handle.transition(QueryState.failed(e))
            return

        if policy != "no-cache":
            self.cache.write(signature, data)

        self.logger.info(
            "query_completed",
            operation=operation.query.operation_name,
            signature=signature[:12],
        )
        handle.transition(QueryState.succeeded(data))

    async def aclose(self) -> None:
        """Release HTTP resources held by the link chain."""
        await self.link.aclose()


def extract_data(body: Mapping[str, Any]) -> dict[str, Any]:
    """Pull ``data`` out of a GraphQL response body.

    A non-empty ``errors`` array wins over any partial data.
    """
    errors = body.get("errors")
    if errors:
        if not isinstance(errors, list):
            errors = [{"message": str(errors)}]
        raise GraphQLResponseError(errors, details={"data": body.get("data")})

    data = body.get("data")
    if not isinstance(data, dict):
        raise ProtocolError("Response has no data object")
    return data


def build_client(
    endpoint_url: str,
    *,
    cache: QueryCache | None = None,
    links: Iterable[ILink] = (),
    fetch_policy: FetchPolicy | None = None,
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> GraphQLClient:
    """Build a client whose chain ends in an HTTP link to ``endpoint_url``.

    Nothing touches the network here; a bad or unreachable URL only shows up
    as a failed query.
    """
    settings = get_settings()
    chain = LinkChain.from_links(
        [
            *links,
            HttpLink(
                endpoint_url,
                timeout=timeout if timeout is not None else settings.http_timeout,
                transport=transport,
            ),
        ]
    )
    return GraphQLClient(
        link=chain,
        cache=cache if cache is not None else QueryCache(default_ttl=settings.cache_ttl),
        fetch_policy=fetch_policy or settings.fetch_policy,
    )

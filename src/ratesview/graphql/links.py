"""Request link chain: composable stages ending in an HTTP transport."""

from collections.abc import Iterable, Mapping
from functools import partial
from typing import Any

import httpx

from ratesview.core.exceptions import ConfigurationError, NetworkError, ProtocolError
from ratesview.core.interfaces import ILink, NextLink
from ratesview.core.logging import get_logger
from ratesview.infrastructure.http import HTTPClient
from ratesview.models.query import Operation


class HttpLink(ILink):
    """Terminating link that POSTs the operation to a GraphQL endpoint."""

    def __init__(
        self,
        uri: str,
        http: HTTPClient | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not uri:
            raise ConfigurationError("GraphQL endpoint URL must not be empty")
        self.uri = uri
        self.http = http or HTTPClient(timeout=timeout, transport=transport)
        self.logger = get_logger("http_link")

    async def request(self, operation: Operation, forward: NextLink) -> dict[str, Any]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            **operation.headers,
        }

        try:
            response = await self.http.post(
                self.uri,
                json=operation.to_request_body(),
                headers=headers,
            )
        except httpx.TimeoutException as e:
            raise NetworkError(
                f"Request to {self.uri} timed out",
                details={"uri": self.uri},
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise NetworkError(
                f"Request to {self.uri} failed: {e}",
                details={"uri": self.uri},
            ) from e

        self.logger.debug(
            "graphql_response",
            uri=self.uri,
            status_code=response.status_code,
            operation=operation.query.operation_name,
        )

        if not response.is_success:
            raise ProtocolError(
                f"HTTP {response.status_code} from {self.uri}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ProtocolError(
                f"Response from {self.uri} is not valid JSON",
                status_code=response.status_code,
            ) from e

        if not isinstance(body, dict):
            raise ProtocolError(
                f"Response from {self.uri} is not a JSON object",
                status_code=response.status_code,
            )

        return body

    async def aclose(self) -> None:
        await self.http.aclose()


class HeadersLink(ILink):
    """Adds fixed headers to every outgoing operation."""

    def __init__(self, headers: Mapping[str, str]) -> None:
        self.headers = dict(headers)

    async def request(self, operation: Operation, forward: NextLink) -> dict[str, Any]:
        operation.headers.update(self.headers)
        return await forward(operation)


class LinkChain:
    """Ordered stages applied to every operation."""

    def __init__(self, links: Iterable[ILink]) -> None:
        self.links = tuple(links)
        if not self.links:
            raise ConfigurationError("A link chain needs at least one link")

    @classmethod
    def from_links(cls, links: Iterable[ILink]) -> "LinkChain":
        return cls(links)

    async def execute(self, operation: Operation) -> dict[str, Any]:
        """Run the operation through the chain and return the raw response body."""
        return await self._dispatch(0, operation)

    async def _dispatch(self, index: int, operation: Operation) -> dict[str, Any]:
        if index >= len(self.links):
            raise ConfigurationError("Link chain ended without a terminating link")
        link = self.links[index]
        return await link.request(operation, partial(self._dispatch, index + 1))

    async def aclose(self) -> None:
        for link in self.links:
            if isinstance(link, HttpLink):
                await link.aclose()

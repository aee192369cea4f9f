"""Abstract interfaces for the cache and the link chain."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ratesview.models.query import Operation

# Continues an operation down the rest of the chain.
NextLink = Callable[["Operation"], Awaitable[dict[str, Any]]]


class ICache(ABC):
    """Caching interface.

    Lookups are synchronous so a client can answer from the cache before
    handing control back to the event loop.
    """

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Get value from cache."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Set value in cache with optional TTL."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete value from cache."""
        ...

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check if key exists in cache."""
        ...


class ILink(ABC):
    """One stage of a GraphQL request chain."""

    @abstractmethod
    async def request(self, operation: "Operation", forward: NextLink) -> dict[str, Any]:
        """Handle the operation, calling ``forward`` to continue the chain.

        A stage may modify the operation before forwarding, inspect the
        result on the way back, or return a result without forwarding.
        """
        ...

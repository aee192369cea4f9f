"""Infrastructure layer."""

from ratesview.infrastructure.http import HTTPClient
from ratesview.infrastructure.cache import MemoryCache, QueryCache

__all__ = ["HTTPClient", "MemoryCache", "QueryCache"]

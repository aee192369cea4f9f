"""Core module - configuration, logging, and interfaces."""

from ratesview.core.config import Settings, get_settings
from ratesview.core.exceptions import (
    RatesViewError,
    ConfigurationError,
    NetworkError,
    ProtocolError,
    GraphQLResponseError,
)

__all__ = [
    "Settings",
    "get_settings",
    "RatesViewError",
    "ConfigurationError",
    "NetworkError",
    "ProtocolError",
    "GraphQLResponseError",
]

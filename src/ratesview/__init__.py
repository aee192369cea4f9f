"""ratesview - exchange rates from a GraphQL endpoint, rendered."""

from ratesview.version import __version__

__all__ = ["__version__"]

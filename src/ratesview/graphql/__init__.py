"""GraphQL client, link chain and queries."""

from ratesview.graphql.client import GraphQLClient, build_client, extract_data
from ratesview.graphql.handle import QueryHandle
from ratesview.graphql.links import HeadersLink, HttpLink, LinkChain
from ratesview.graphql.queries import EXCHANGE_RATES, fetch_exchange_rates

__all__ = [
    "GraphQLClient",
    "build_client",
    "extract_data",
    "QueryHandle",
    "HeadersLink",
    "HttpLink",
    "LinkChain",
    "EXCHANGE_RATES",
    "fetch_exchange_rates",
]

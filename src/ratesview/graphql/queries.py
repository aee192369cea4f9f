"""Queries sent by the application."""

from ratesview.graphql.client import GraphQLClient
from ratesview.graphql.handle import QueryHandle
from ratesview.models.query import gql

EXCHANGE_RATES = gql(
    """
    query GetExchangeRates {
      rates(currency: "USD") {
        currency
        rate
        name
      }
    }
    """
)


def fetch_exchange_rates(client: GraphQLClient) -> QueryHandle:
    """Start the GetExchangeRates query on ``client``."""
    return client.execute(EXCHANGE_RATES)

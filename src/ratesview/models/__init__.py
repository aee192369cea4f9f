"""Pydantic data models for ratesview."""

from ratesview.models.base import BaseSchema, QueryStatus
from ratesview.models.query import (
    QueryDefinition,
    Operation,
    gql,
    query_signature,
)
from ratesview.models.state import QueryState
from ratesview.models.rates import RateRow, RatesPayload, rate_rows

__all__ = [
    "BaseSchema",
    "QueryStatus",
    "QueryDefinition",
    "Operation",
    "gql",
    "query_signature",
    "QueryState",
    "RateRow",
    "RatesPayload",
    "rate_rows",
]

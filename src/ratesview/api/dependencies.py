"""Request dependencies."""

from fastapi import Request

from ratesview.graphql import GraphQLClient


def get_client(request: Request) -> GraphQLClient:
    """The client built once by the application lifespan."""
    return request.app.state.client

"""Health check endpoints."""

from fastapi import APIRouter, Depends

from ratesview.api.dependencies import get_client
from ratesview.graphql import GraphQLClient
from ratesview.version import __version__

router = APIRouter()


@router.get("/health")
async def health_check(client: GraphQLClient = Depends(get_client)) -> dict:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
        "cached_queries": len(client.cache),
    }

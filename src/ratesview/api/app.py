"""FastAPI application."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from ratesview.api.routers import health, pages, rates
from ratesview.core.config import get_settings
from ratesview.core.logging import get_logger, setup_logging
from ratesview.graphql import GraphQLClient, build_client
from ratesview.version import __version__


def create_app(client: GraphQLClient | None = None) -> FastAPI:
    """Application factory.

    Pass ``client`` to inject an already built client; its lifetime then
    stays with the caller. Otherwise one is built from settings at startup
    and closed at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan handler."""
        setup_logging()
        logger = get_logger("api")

        if client is None:
            endpoint = get_settings().graphql_endpoint
            app.state.client = build_client(endpoint)
            logger.info("api_started", endpoint=endpoint)
        else:
            app.state.client = client
            logger.info("api_started", endpoint="injected")

        yield

        if client is None:
            await app.state.client.aclose()
        logger.info("api_stopped")

    app = FastAPI(
        title="ratesview",
        description="Exchange rates from a GraphQL endpoint",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    if client is not None:
        app.state.client = client

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(pages.router, tags=["Pages"])
    app.include_router(rates.router, prefix="/api/v1", tags=["Rates"])

    return app


app = create_app()

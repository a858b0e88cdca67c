"""
FastAPI application for spahost.

This module builds the ASGI application that serves a built single-page app:
static files from the content root, index.html for client-side routes.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request

from api.dispatcher import SPADispatcher
from core.root import ContentRoot
from observability.metrics import metrics
from observability.tracing import setup_tracing

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("spahost.api")


# ------------------------------------------------------------------------------
# Logging
# ------------------------------------------------------------------------------
def configure_logging(level: str = "info") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


# ------------------------------------------------------------------------------
# App
# ------------------------------------------------------------------------------
def create_app(content_root: ContentRoot) -> FastAPI:
    """
    Create the application for a validated content root.

    Args:
        content_root: Root directory and index.html, already validated

    Returns:
        FastAPI: Application with the SPA dispatcher mounted at "/"
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting spahost for %s", content_root.root)
        yield
        logger.info("Shutting down spahost")

    # The whole URL space belongs to the SPA, so no docs routes
    app = FastAPI(
        title="spahost",
        description="Static file server with single-page application fallback",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def record_request_metrics(request: Request, call_next):
        with metrics.request_timer(request.method) as timer:
            response = await call_next(request)
            timer.status = response.status_code
        return response

    app.mount("/", SPADispatcher(content_root), name="spa")
    setup_tracing(app)
    return app

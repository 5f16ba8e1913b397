"""API route registration."""

from fastapi import FastAPI

from intent_resolver.observability.logging import get_logger

logger = get_logger(__name__)


def register_routes(app: FastAPI) -> None:
    """Register all routes with the FastAPI application."""
    from intent_resolver.api.routes.health import router as health_router
    from intent_resolver.api.routes.resolve import router as resolve_router

    app.include_router(resolve_router, tags=["Resolve"])
    app.include_router(health_router, tags=["Health"])

    logger.debug("routes_registered", routes=["database", "resolve", "health", "metrics"])

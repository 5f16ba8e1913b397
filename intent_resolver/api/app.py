"""FastAPI application factory.

Creates and configures the FastAPI application with logging, route
registration and a last-resort exception handler that still answers in
the channel's answer format.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from intent_resolver import __version__
from intent_resolver.answers import AnswerBuilder
from intent_resolver.api.dependencies import get_settings, reset_dependencies
from intent_resolver.api.routes import register_routes
from intent_resolver.observability.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    yield
    await reset_dependencies()
    logger.info("app_shutdown")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    log_config = settings.observability.logging
    setup_logging(
        level=log_config.level,
        format=log_config.format,
        redact_pii=log_config.redact_pii,
    )

    app = FastAPI(
        title="Intent Resolver",
        description="Resolves NLU intents into user-profile store operations",
        version=__version__,
        lifespan=lifespan,
    )

    answers = AnswerBuilder(
        locale=settings.resolver.locale,
        history_name=settings.resolver.history_name,
    )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Answer unexpected exceptions with the default failure."""
        logger.exception(
            "unexpected_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        answer = answers.default_failure(f"{type(exc).__name__}: {exc}")
        return JSONResponse(status_code=500, content=answer.to_payload())

    register_routes(app)

    logger.info(
        "app_created",
        app_name=settings.app_name,
        gateway=settings.gateway.base_url,
    )
    return app


def main() -> None:
    """Run the service with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "intent_resolver.api.app:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
    )


if __name__ == "__main__":
    main()

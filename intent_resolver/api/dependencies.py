"""Dependency injection for API routes.

Provides the settings, profile store client and dispatcher used by the
resolve endpoint. Dependencies can be overridden for testing.
"""

from typing import Annotated

from fastapi import Depends

from intent_resolver.config import Settings, get_settings
from intent_resolver.gateway import DatabaseGateway
from intent_resolver.observability.logging import get_logger
from intent_resolver.resolution import Dispatcher

logger = get_logger(__name__)

# Shared across requests; holds the HTTP connection pool
_gateway: DatabaseGateway | None = None
_dispatcher: Dispatcher | None = None


def get_gateway(settings: Annotated[Settings, Depends(get_settings)]) -> DatabaseGateway:
    """Get the shared profile store client, creating it on first access."""
    global _gateway
    if _gateway is None:
        _gateway = DatabaseGateway.from_config(settings.gateway)
        logger.info("gateway_initialized", base_url=settings.gateway.base_url)
    return _gateway


def get_dispatcher(
    settings: Annotated[Settings, Depends(get_settings)],
    gateway: Annotated[DatabaseGateway, Depends(get_gateway)],
) -> Dispatcher:
    """Get the shared dispatcher."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = Dispatcher.from_settings(settings, gateway)
    return _dispatcher


SettingsDep = Annotated[Settings, Depends(get_settings)]
DispatcherDep = Annotated[Dispatcher, Depends(get_dispatcher)]


async def reset_dependencies() -> None:
    """Reset all cached dependencies.

    Closes the profile store client and drops the cached settings.
    """
    global _gateway, _dispatcher

    if _gateway is not None:
        await _gateway.close()
        _gateway = None

    _dispatcher = None
    get_settings.cache_clear()

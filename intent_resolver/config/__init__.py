"""Configuration for the intent resolver.

Usage:
    from intent_resolver.config import get_settings

    settings = get_settings()
    base_url = settings.gateway.base_url
"""

from functools import lru_cache

from intent_resolver.config.loader import load_config
from intent_resolver.config.settings import Settings, set_toml_config
from intent_resolver.observability.logging import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use.

    Without a config directory the service runs on model defaults plus
    INTENT_RESOLVER_* variables.
    """
    try:
        set_toml_config(load_config())
    except FileNotFoundError as e:
        logger.warning("config_file_not_found", error=str(e))
        set_toml_config({})

    return Settings()


def reload_settings() -> Settings:
    """Drop the cached settings and load them again."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]

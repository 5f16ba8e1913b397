"""Configuration model exports.

    from intent_resolver.config.models import GatewayConfig, LinkingConfig
"""

from intent_resolver.config.models.api import APIConfig
from intent_resolver.config.models.gateway import GatewayConfig
from intent_resolver.config.models.linking import LinkingConfig
from intent_resolver.config.models.observability import LoggingConfig, ObservabilityConfig
from intent_resolver.config.models.resolver import ResolverConfig

__all__ = [
    "APIConfig",
    "GatewayConfig",
    "LinkingConfig",
    "LoggingConfig",
    "ObservabilityConfig",
    "ResolverConfig",
]

"""Client for the external user-profile store."""

from intent_resolver.gateway.client import DatabaseGateway
from intent_resolver.gateway.errors import GatewayError
from intent_resolver.gateway.models import LinkCode, UserProfile, WriteResult

__all__ = ["DatabaseGateway", "GatewayError", "LinkCode", "UserProfile", "WriteResult"]

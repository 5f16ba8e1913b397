"""Inbound NLU messages and entity extraction."""

from intent_resolver.messages.entities import (
    ALL_DETAILS,
    INTERNAL_ROLES,
    detail_name,
    find_detail_entity,
    find_entity,
    is_all_details,
)
from intent_resolver.messages.models import (
    Entity,
    Intent,
    Message,
    MessageUser,
    MessengerIdentity,
)

__all__ = [
    "ALL_DETAILS",
    "INTERNAL_ROLES",
    "Entity",
    "Intent",
    "Message",
    "MessageUser",
    "MessengerIdentity",
    "detail_name",
    "find_detail_entity",
    "find_entity",
    "is_all_details",
]

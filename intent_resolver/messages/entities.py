"""Entity lookup on NLU messages.

Only the first entity per role is used. Roles that carry registration
secrets are never handed out, so they cannot leak through the generic
detail operations.
"""

from intent_resolver.messages.models import Entity, Message

CODE_ROLE = "code"
CODE_TIMESTAMP_ROLE = "code-timestamp"
INTERNAL_ROLES: frozenset[str] = frozenset({CODE_ROLE, CODE_TIMESTAMP_ROLE})

DETAIL_PREFIX = "detail"
ALL_DETAILS = "all-details"


def find_entity(message: Message, role: str) -> Entity | None:
    """Return the first entity with the given role, or None.

    Internal roles always yield None, even when present.
    """
    if role in INTERNAL_ROLES:
        return None

    for entity in message.entities:
        if entity.entity == role:
            return entity
    return None


def detail_name(entity: Entity) -> str:
    """Strip the detail- prefix from a detail entity's role."""
    return entity.entity.removeprefix(f"{DETAIL_PREFIX}-")


def is_all_details(entity: Entity) -> bool:
    return entity.entity == ALL_DETAILS


def find_detail_entity(message: Message) -> Entity | None:
    """Return the first entity naming a detail or the all-details sentinel.

    A detail entity addressing an internal field (detail-code) is skipped.
    """
    for entity in message.entities:
        if is_all_details(entity):
            return entity
        if entity.entity.startswith(DETAIL_PREFIX) and detail_name(entity) not in INTERNAL_ROLES:
            return entity
    return None

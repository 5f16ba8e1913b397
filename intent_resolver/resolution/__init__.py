"""Resolution of NLU messages into profile store operations."""

from intent_resolver.resolution.details import DetailResolver
from intent_resolver.resolution.dispatcher import Dispatcher
from intent_resolver.resolution.linking import (
    AccountLinkingWorkflow,
    LinkingState,
    generate_code,
)

__all__ = [
    "AccountLinkingWorkflow",
    "DetailResolver",
    "Dispatcher",
    "LinkingState",
    "generate_code",
]

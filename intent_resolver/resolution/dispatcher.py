"""Entry point: route an NLU message to the operation its intent names."""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from intent_resolver.answers import Answer, AnswerBuilder
from intent_resolver.config.models.linking import LinkingConfig
from intent_resolver.config.settings import Settings
from intent_resolver.gateway import DatabaseGateway
from intent_resolver.messages import Message
from intent_resolver.observability.logging import get_logger
from intent_resolver.observability.metrics import RESOLUTIONS
from intent_resolver.resolution import errors
from intent_resolver.resolution.details import DetailResolver
from intent_resolver.resolution.linking import AccountLinkingWorkflow

logger = get_logger(__name__)

Handler = Callable[[Message], Awaitable[Answer]]


class Dispatcher:
    """Resolves one message into exactly one answer.

    Handlers are looked up by exact intent name; unknown intents fall
    through to an error answer naming the operation.
    """

    def __init__(
        self,
        gateway: DatabaseGateway,
        answers: AnswerBuilder | None = None,
        linking: AccountLinkingWorkflow | None = None,
        linking_config: LinkingConfig | None = None,
    ) -> None:
        self._answers = answers or AnswerBuilder()
        self._details = DetailResolver(gateway, self._answers)
        self._linking = linking or AccountLinkingWorkflow(
            gateway, self._answers, config=linking_config
        )
        self._handlers: dict[str, Handler] = {
            "database-get": self._details.get_detail,
            "database-set": self._details.set_detail,
            "database-remove": self._details.remove_detail,
            "link-user-get": self._linking.trigger,
            "link-user-set": self._linking.verify,
            "link-user-remove": self._linking.delete,
        }

    @classmethod
    def from_settings(cls, settings: Settings, gateway: DatabaseGateway) -> "Dispatcher":
        answers = AnswerBuilder(
            locale=settings.resolver.locale,
            history_name=settings.resolver.history_name,
        )
        return cls(gateway, answers=answers, linking_config=settings.linking)

    @property
    def intents(self) -> list[str]:
        return list(self._handlers)

    async def resolve(self, payload: Message | Mapping[str, Any] | None) -> Answer:
        """Resolve a message.

        Raw input is the request envelope `{"message": {...}}`; an already
        parsed Message is resolved as is.
        """
        if isinstance(payload, Message):
            message = payload
        else:
            raw = payload.get("message") if isinstance(payload, Mapping) else payload
            if raw is None:
                return self._count("none", self._answers.default_failure(errors.NO_MESSAGE))

            try:
                message = Message.model_validate(raw)
            except ValidationError as e:
                logger.warning("message_invalid", errors=e.errors(include_input=False))
                return self._count(
                    "none", self._answers.default_failure(errors.MALFORMED_MESSAGE)
                )

        name = message.intent_name
        if not name:
            return self._count("none", self._answers.default_failure(errors.NO_INTENT))

        handler = self._handlers.get(name)
        if handler is None:
            logger.info("unknown_intent", intent=name)
            return self._count(
                "unknown",
                self._answers.failure(
                    self._answers.texts("unknown_operation"), errors.unknown_operation(name)
                ),
            )

        with structlog.contextvars.bound_contextvars(intent=name, user_id=message.user_id):
            try:
                answer = await handler(message)
            except Exception as e:
                logger.exception("resolution_failed", error_type=type(e).__name__)
                answer = self._answers.default_failure(f"{type(e).__name__}: {e}")

            logger.info("intent_resolved", failed=answer.failed, error=answer.error)

        return self._count(name, answer)

    def _count(self, intent: str, answer: Answer) -> Answer:
        RESOLUTIONS.labels(
            intent=intent, outcome="failure" if answer.failed else "success"
        ).inc()
        return answer

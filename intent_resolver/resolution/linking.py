"""Account linking: attach a new messenger identity to an existing account.

A user on messenger A asks for a linking code (trigger). On messenger B,
where the user has a fresh shadow account, they send that code back
(verify). If the code matches and has not expired, the shadow account is
either linked into the main account (one messenger identity) or merged with
it (several identities), and the shadow account is deleted afterwards.

All durable state lives in the profile store; the workflow itself holds
nothing between calls.
"""

import secrets
import time
from collections.abc import Callable
from enum import Enum

from intent_resolver.answers import Answer, AnswerBuilder
from intent_resolver.config.models.linking import LinkingConfig
from intent_resolver.gateway import DatabaseGateway, GatewayError, LinkCode
from intent_resolver.messages import Message, find_entity
from intent_resolver.observability.logging import get_logger
from intent_resolver.observability.metrics import LINKING_CODE_COLLISIONS, LINKING_OUTCOMES
from intent_resolver.resolution import errors

logger = get_logger(__name__)

LINKING_CODE_ROLE = "linkingcode"
MESSENGER_ROLE = "messenger"


class LinkingState(str, Enum):
    """States a linking code passes through."""

    IDLE = "idle"
    CODE_ISSUED = "code_issued"
    VERIFIED = "verified"
    EXPIRED = "expired"
    MISMATCHED = "mismatched"
    LINKED = "linked"
    MERGED = "merged"
    FAILED = "failed"


def now_millis() -> int:
    """Current time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def generate_code(length: int = 6) -> str:
    """Generate a numeric code, one uniformly random digit at a time.

    Leading zeros are kept.
    """
    code = ""
    while len(code) < length:
        code += str(secrets.randbelow(10))
    return code


def codes_match(stored: str, supplied: str) -> bool:
    """Compare two codes by numeric value."""
    try:
        return int(stored) == int(supplied)
    except ValueError:
        return False


class AccountLinkingWorkflow:
    """Issues, verifies and removes messenger account links."""

    def __init__(
        self,
        gateway: DatabaseGateway,
        answers: AnswerBuilder,
        config: LinkingConfig | None = None,
        clock: Callable[[], int] = now_millis,
        code_factory: Callable[[int], str] = generate_code,
    ) -> None:
        """Initialize the workflow.

        Args:
            gateway: Profile store client
            answers: Builder for the answers returned to the channel
            config: Code length, validity and retry limits
            clock: Returns the current time in epoch milliseconds
            code_factory: Returns a fresh code of the given length
        """
        self._gateway = gateway
        self._answers = answers
        self._config = config or LinkingConfig()
        self._clock = clock
        self._code_factory = code_factory

    async def trigger(self, message: Message) -> Answer:
        """Issue a linking code for the requesting user.

        Codes still active for someone else are rejected by the store with
        a retry signal; a new code is generated up to max_code_attempts times.
        """
        texts = self._answers.texts
        user_id = message.user_id
        if not user_id:
            return self._answers.failure(texts("no_user"), errors.NO_USER)

        attempts = self._config.max_code_attempts
        try:
            for attempt in range(1, attempts + 1):
                code = self._code_factory(self._config.code_length)
                result = await self._gateway.issue_code(user_id, code, self._clock())

                if result.acknowledged_insert:
                    logger.info(
                        "linking_code_issued",
                        state=LinkingState.CODE_ISSUED.value,
                        attempt=attempt,
                    )
                    return self._answers.success(
                        texts(
                            "code_issued",
                            code=code,
                            minutes=self._config.code_ttl_ms // 60_000,
                        )
                    )

                if not result.retry:
                    logger.warning("linking_code_not_stored", attempt=attempt)
                    return self._answers.failure(texts("code_failed"), errors.CODE_NOT_STORED)

                LINKING_CODE_COLLISIONS.inc()
                logger.info("linking_code_collision", attempt=attempt)
        except GatewayError as e:
            return self._answers.default_failure(e.message)

        logger.warning("linking_code_attempts_exhausted", attempts=attempts)
        return self._answers.failure(
            texts("code_failed"), errors.code_attempts_exhausted(attempts)
        )

    async def verify(self, message: Message) -> Answer:
        """Check a supplied code and link or merge the requesting account."""
        texts = self._answers.texts
        user = message.user
        if user is None or not user.id:
            return self._answers.failure(texts("no_user"), errors.NO_USER)

        entity = find_entity(message, LINKING_CODE_ROLE)
        supplied = (entity.value or "").strip() if entity else ""
        if not supplied:
            return self._answers.failure(texts("code_missing"), errors.NO_LINKING_CODE)

        try:
            record = await self._gateway.lookup_code(supplied) if supplied.isdigit() else None
            if record is None:
                return self._finish(
                    LinkingState.MISMATCHED,
                    self._answers.failure(texts("code_wrong"), errors.CODE_RECORD_NOT_FOUND),
                )

            state = self.check_code(record, supplied)
            if state is LinkingState.MISMATCHED:
                return self._finish(
                    state, self._answers.failure(texts("code_wrong"), errors.WRONG_CODE)
                )
            if state is LinkingState.EXPIRED:
                return self._finish(
                    state, self._answers.failure(texts("code_timeout"), errors.CODE_TIMEOUT)
                )

            if record.user_id == user.id:
                return self._finish(
                    LinkingState.FAILED,
                    self._answers.failure(texts("self_link"), errors.SELF_LINK),
                )

            main = await self._gateway.get_user(record.user_id)
            identities = user.messenger_identities

            if len(identities) > 1:
                state = LinkingState.MERGED
                operation = "merge"
                result = await self._gateway.merge_accounts(main.to_record(), user.to_record())
            elif identities:
                state = LinkingState.LINKED
                operation = "link"
                identity = identities[0]
                result = await self._gateway.link_account(
                    main.to_record(), identity.messenger, identity.id
                )
            else:
                return self._finish(
                    LinkingState.FAILED,
                    self._answers.failure(texts("no_identity"), errors.NO_MESSENGER_IDENTITY),
                )

            if not result.acknowledged_update:
                return self._finish(
                    LinkingState.FAILED,
                    self._answers.failure(
                        texts("link_failed"), errors.accounts_not_modified(operation)
                    ),
                )
        except GatewayError as e:
            return self._finish(LinkingState.FAILED, self._answers.default_failure(e.message))

        try:
            await self._gateway.delete_user(user.id)
        except GatewayError as e:
            # The link already holds; only the shadow record is left behind
            logger.warning("shadow_account_delete_failed", state=state.value, error=e.message)
            return self._finish(
                state,
                self._answers.failure(texts("accounts_linked"), errors.SHADOW_NOT_DELETED),
            )

        return self._finish(state, self._answers.success(texts("accounts_linked")))

    def check_code(self, record: LinkCode, supplied: str) -> LinkingState:
        """Classify a supplied code against its stored record.

        A matching but expired code is EXPIRED, never MISMATCHED.
        """
        if not codes_match(record.code, supplied):
            return LinkingState.MISMATCHED
        if record.is_expired(self._clock(), self._config.code_ttl_ms):
            return LinkingState.EXPIRED
        return LinkingState.VERIFIED

    def _finish(self, state: LinkingState, answer: Answer) -> Answer:
        LINKING_OUTCOMES.labels(outcome=state.value).inc()
        logger.info("linking_verification_finished", state=state.value, error=answer.error)
        return answer

    async def delete(self, message: Message) -> Answer:
        """Detach a messenger identity from the requesting user's account."""
        texts = self._answers.texts
        user = message.user
        if user is None or not user.id:
            return self._answers.failure(texts("no_user"), errors.NO_USER)

        entity = find_entity(message, MESSENGER_ROLE)
        if entity is None or not entity.value:
            return self._answers.failure(texts("messenger_missing"), errors.NO_MESSENGER)
        messenger = entity.value.lower()

        try:
            result = await self._gateway.unlink_messenger(user.to_record(), messenger)
        except GatewayError as e:
            return self._answers.default_failure(e.message)

        if not result.acknowledged_update:
            logger.warning("messenger_unlink_not_acknowledged", messenger=messenger)
            return self._answers.failure(
                texts("messenger_remove_failed", messenger=messenger),
                errors.unlink_not_acknowledged(messenger),
            )

        logger.info("messenger_unlinked", messenger=messenger)
        return self._answers.success(texts("messenger_removed", messenger=messenger))

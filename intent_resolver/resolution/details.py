"""Get, set and remove user details in the profile store."""

from intent_resolver.answers import Answer, AnswerBuilder
from intent_resolver.gateway import DatabaseGateway, GatewayError, UserProfile
from intent_resolver.messages import (
    INTERNAL_ROLES,
    Message,
    detail_name,
    find_detail_entity,
    find_entity,
    is_all_details,
)
from intent_resolver.observability.logging import get_logger
from intent_resolver.resolution import errors

logger = get_logger(__name__)

# Entity role carrying the value for a detail, where it differs from the detail name
VALUE_ROLES: dict[str, str] = {
    "home": "city",
    "birthday": "time",
    "meal-preference": "meal-preference",
    "allergic": "allergen",
}


def value_role(detail: str) -> str:
    """Return the entity role holding the value for a detail."""
    return VALUE_ROLES.get(detail, detail)


class DetailResolver:
    """Maps database-get/set/remove messages onto profile store calls."""

    def __init__(self, gateway: DatabaseGateway, answers: AnswerBuilder) -> None:
        self._gateway = gateway
        self._answers = answers

    async def get_detail(self, message: Message) -> Answer:
        """Answer with one detail, or with everything known about the user."""
        texts = self._answers.texts
        user_id = message.user_id
        if not user_id:
            return self._answers.failure(texts("no_user"), errors.NO_USER)

        entity = find_detail_entity(message)
        if entity is None:
            return self._answers.default_failure(errors.NO_DETAIL_ENTITY)

        try:
            profile = await self._gateway.get_details(user_id)
        except GatewayError as e:
            return self._answers.default_failure(e.message)

        if is_all_details(entity):
            return self._answers.success(self.render_all(profile))

        name = detail_name(entity)
        if name not in profile.details:
            logger.info("detail_not_found", detail=name)
            return self._answers.failure(
                texts("detail_not_found", detail=name), errors.detail_not_found(name)
            )

        return self._answers.success(
            texts("detail_value", detail=name, value=profile.details[name])
        )

    def render_all(self, profile: UserProfile) -> str:
        """Render names and details as one line each, skipping internal fields."""
        texts = self._answers.texts
        lines: list[str] = []

        for label, value in (
            ("label_nickname", profile.nickname),
            ("label_first_name", profile.first_name),
            ("label_last_name", profile.last_name),
        ):
            if value:
                lines.append(texts("detail_value", detail=texts(label), value=value))

        for key, value in profile.details.items():
            if str(key) in INTERNAL_ROLES:
                continue
            lines.append(texts("detail_value", detail=key, value=value))

        if not lines:
            return texts("all_details_empty")
        return "\n".join([texts("all_details_header"), *lines])

    async def set_detail(self, message: Message) -> Answer:
        """Store one detail taken from the value entity matching it."""
        texts = self._answers.texts
        user_id = message.user_id
        if not user_id:
            return self._answers.failure(texts("no_user"), errors.NO_USER)

        entity = find_detail_entity(message)
        if entity is None:
            return self._answers.default_failure(errors.NO_DETAIL_ENTITY)
        if is_all_details(entity):
            return self._answers.failure(texts("bulk_set"), errors.BULK_SET_UNSUPPORTED)

        name = detail_name(entity)
        value_entity = find_entity(message, value_role(name))
        if value_entity is None or not value_entity.value:
            return self._answers.failure(
                texts("value_missing", detail=name), errors.value_missing(name)
            )

        try:
            await self._gateway.set_detail(user_id, name, value_entity.value)
        except GatewayError as e:
            return self._answers.default_failure(e.message)

        logger.info("detail_set", detail=name)
        return self._answers.success(texts("detail_saved"))

    async def remove_detail(self, message: Message) -> Answer:
        """Remove one detail, or all of them for the all-details sentinel."""
        texts = self._answers.texts
        user_id = message.user_id
        if not user_id:
            return self._answers.failure(texts("no_user"), errors.NO_USER)

        entity = find_detail_entity(message)
        if entity is None:
            return self._answers.default_failure(errors.NO_DETAIL_ENTITY)

        try:
            if is_all_details(entity):
                await self._gateway.remove_details(user_id)
                logger.info("details_removed")
                return self._answers.success(texts("all_removed"))

            name = detail_name(entity)
            await self._gateway.remove_detail(user_id, name)
        except GatewayError as e:
            return self._answers.default_failure(e.message)

        logger.info("detail_removed", detail=name)
        return self._answers.success(texts("detail_removed", detail=name))

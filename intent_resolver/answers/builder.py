"""Constructors for the two canonical answer shapes."""

from intent_resolver.answers.models import Answer, AnswerBody
from intent_resolver.answers.texts import DEFAULT_LOCALE, Texts

DEFAULT_HISTORY_NAME = "intent-resolve"


class AnswerBuilder:
    """Builds success and error answers in one locale.

    Every answer carries a one-element history naming this resolver so
    the upstream layer can stitch conversation traces together.
    """

    def __init__(
        self,
        locale: str = DEFAULT_LOCALE,
        history_name: str = DEFAULT_HISTORY_NAME,
    ) -> None:
        self.texts = Texts(locale)
        self.history_name = history_name

    def _body(self, content: str) -> AnswerBody:
        return AnswerBody(content=content, history=[self.history_name])

    def success(self, content: str) -> Answer:
        return Answer(answer=self._body(content))

    def failure(self, content: str, error: str) -> Answer:
        return Answer(answer=self._body(content), error=error)

    def default_failure(self, error: str) -> Answer:
        """Failure without a tailored user message."""
        return self.failure(self.texts("default"), error)

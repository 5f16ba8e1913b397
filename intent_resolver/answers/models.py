"""Answer models returned to the calling channel."""

from typing import Any

from pydantic import BaseModel, Field


class AnswerBody(BaseModel):
    """User-facing part of an answer."""

    content: str = Field(..., description="Human-readable, localized text")
    history: list[str] = Field(
        default_factory=list, description="Resolvers this answer passed through"
    )


class Answer(BaseModel):
    """Result of resolving one message.

    `error` is set if and only if the operation failed. It is machine-readable
    and never localized.
    """

    answer: AnswerBody
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def content(self) -> str:
        return self.answer.content

    def to_payload(self) -> dict[str, Any]:
        """Serialize for the wire, omitting `error` on success."""
        return self.model_dump(exclude_none=True)

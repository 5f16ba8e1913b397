"""Answers produced for the calling channel."""

from intent_resolver.answers.builder import AnswerBuilder
from intent_resolver.answers.models import Answer, AnswerBody
from intent_resolver.answers.texts import Texts

__all__ = ["Answer", "AnswerBody", "AnswerBuilder", "Texts"]

# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-28
# Description: IQCanonicalizer
# -----------------------------------------------------------------------------
import logging
from typing import Protocol, runtime_checkable

from chat.OpenAIChat import OpenAIChat
from utility.errors import ProviderError
from utility.logging_utils import get_class_logger


@runtime_checkable
class TextCanonicalizer(Protocol):
    def canonicalize(self, text: str) -> str:
        ...


class OpenAICanonicalizer(TextCanonicalizer):
    """
    Restates an interview question as its core concept using an OpenAI chat model.
    Raises ProviderError when the chat call fails.
    """

    system_prompt: str = (
        "You are an assistant that identifies the fundamental concepts in interview questions. "
        "Extract the core question being asked, removing any unnecessary context or verbosity. "
        "Your response should still be in question format. "
        "Do not use any markdown formatting in your response. "
        "Keep your response simple, direct, and focused on what's being tested."
    )

    def __init__(
        self,
        chat_client: OpenAIChat,
        *,
        max_tokens: int = 256,
        logger: logging.Logger | None = None,
    ) -> None:
        self.chat_client = chat_client
        self.max_tokens = max_tokens
        self.logger = logger or get_class_logger(self.__class__)

    @staticmethod
    def _user_prompt(text: str) -> str:
        return (
            "Analyze this interview question and return only its core concept "
            f'as a clear, direct question without any markdown: "{text}"'
        )

    def canonicalize(self, text: str) -> str:
        try:
            reply = self.chat_client.complete(
                self._user_prompt(text),
                system_text=self.system_prompt,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            self.logger.warning("Canonicalisation failed: %s", e)
            raise ProviderError("canonicalizer", str(e)) from e

        answer = reply.answer
        if not answer:
            self.logger.warning("Empty canonicalisation returned; keeping original text")
            return text
        return answer

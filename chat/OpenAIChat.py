# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-22
# Updated: 2026-01-28
# Description: OpenAIChat
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from openai import OpenAI

from utility.logging_utils import get_class_logger

Message = Dict[str, str]  # {"role": "system"|"user"|"assistant", "content": "..."}


@dataclass(frozen=True)
class ChatReply:
    answer: str
    model: Optional[str] = None
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None


@dataclass
class OpenAIChat:
    """
    Chat-completions client used to restate interview questions.

    Reads cfg.openai_api_key and cfg.openai_chat_model (cfg.openai_org optional).
    A pre-built client can be injected for tests.
    """

    cfg: Any
    logger: Any = None
    client: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        self.model = getattr(self.cfg, "openai_chat_model", None)
        if not getattr(self.cfg, "openai_api_key", None):
            raise ValueError("OpenAIChat needs cfg.openai_api_key")
        if not self.model:
            raise ValueError("OpenAIChat needs cfg.openai_chat_model")

        if self.client is None:
            self.client = OpenAI(
                api_key=self.cfg.openai_api_key,
                organization=getattr(self.cfg, "openai_org", None),
            )
        self.logger.info("OpenAIChat ready (model=%s)", self.model)

    def chat(
            self,
            messages: List[Message],
            *,
            temperature: float = 0.0,
            max_tokens: int = 256,
            seed: Optional[int] = None,
    ) -> Any:
        """Raw chat-completions call; returns the SDK response object."""
        if not messages:
            raise ValueError("messages must be non-empty.")

        params: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if seed is not None:
            params["seed"] = seed

        self.logger.debug("Chat request (start) model=%s messages=%d max_tokens=%d",
                          self.model, len(messages), max_tokens)
        return self.client.chat.completions.create(**params)

    def complete(
            self,
            user_text: str,
            *,
            system_text: Optional[str] = None,
            temperature: float = 0.0,
            max_tokens: int = 256,
    ) -> ChatReply:
        messages: List[Message] = []
        if system_text:
            messages.append({"role": "system", "content": system_text})
        messages.append({"role": "user", "content": user_text})

        resp = self.chat(messages, temperature=temperature, max_tokens=max_tokens)
        try:
            content = resp.choices[0].message.content or ""
        except (AttributeError, IndexError, TypeError) as e:
            raise RuntimeError(f"Unexpected chat response format: {e}") from e

        usage = getattr(resp, "usage", None)
        reply = ChatReply(
            answer=content.strip(),
            model=getattr(resp, "model", None),
            prompt_tokens=getattr(usage, "prompt_tokens", None),
            completion_tokens=getattr(usage, "completion_tokens", None),
        )
        self.logger.debug("Chat request (done) model=%s completion_tokens=%s",
                          reply.model, reply.completion_tokens)
        return reply

    def healthcheck(self) -> bool:
        try:
            self.complete("ping", max_tokens=5)
            return True
        except Exception as e:
            self.logger.warning("Chat healthcheck failed: %s", e)
            return False

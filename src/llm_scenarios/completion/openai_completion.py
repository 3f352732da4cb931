"""
Completion Module - Single Responsibility: turn role-tagged messages into text.

No streaming: the full text is returned once the remote generation
completes. An empty generation is the one failure recovered locally: it is
replaced by FALLBACK_RESPONSE instead of being raised.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Sequence

from openai import OpenAI, OpenAIError

from llm_scenarios.config import ServiceSettings
from llm_scenarios.core import (
    ChatMessage,
    CompletionProvider,
    EmptyResponseError,
    UpstreamError,
)
from llm_scenarios.core.openai_client import create_openai_client

logger = logging.getLogger(__name__)

FALLBACK_RESPONSE = "No response generated."


def _require_text(text: str | None) -> str:
    if not text or not text.strip():
        raise EmptyResponseError("completion returned no text")
    return text


def _or_fallback(text: str | None) -> str:
    """Return text, or the fallback when the generation was empty."""
    try:
        return _require_text(text)
    except EmptyResponseError as e:
        logger.warning(f"{e}; using fallback response")
        return FALLBACK_RESPONSE


class OpenAICompletion:
    """
    OpenAI / Azure OpenAI chat completion provider.

    On Azure the deployment name is passed as the model.
    """

    def __init__(self, settings: ServiceSettings, client: OpenAI | None = None):
        self.model = settings.deployment
        self._client = client or create_openai_client(settings)

    def complete(
        self,
        messages: Sequence[ChatMessage],
        max_output_tokens: int,
        temperature: float,
    ) -> str:
        """
        Generate text for the given messages.

        Raises:
            UpstreamError: on transport or auth failure.
        """
        logger.debug(
            f"Completion request: {len(messages)} messages, "
            f"max_tokens={max_output_tokens}, temperature={temperature}"
        )
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[m.to_dict() for m in messages],
                max_tokens=max_output_tokens,
                temperature=temperature,
            )
        except OpenAIError as e:
            raise UpstreamError("completion", str(e)) from e

        text = response.choices[0].message.content if response.choices else None
        return _or_fallback(text)


# ---------------------------------------------------------------------------
# TEST DOUBLE
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CompletionRequest:
    """A request recorded by MockCompletion."""
    messages: tuple[ChatMessage, ...]
    max_output_tokens: int
    temperature: float

    @property
    def user_message(self) -> str:
        return next((m.content for m in self.messages if m.role == "user"), "")

    @property
    def system_message(self) -> str:
        return next((m.content for m in self.messages if m.role == "system"), "")


Responder = Callable[[Sequence[ChatMessage]], str]


class MockCompletion:
    """
    Scripted completion provider for testing without API calls.

    `responses` is either a fixed string, a list consumed in order (the last
    entry repeats), or a callable receiving the messages. Every request is
    recorded in `calls`. Safe to share across threads.
    """

    def __init__(self, responses: str | list[str] | Responder = "Mock response."):
        self._responses = responses
        self._lock = threading.Lock()
        self.calls: list[CompletionRequest] = []

    def _next_response(self, messages: Sequence[ChatMessage]) -> str:
        if callable(self._responses):
            return self._responses(messages)
        if isinstance(self._responses, list):
            if len(self._responses) > 1:
                return self._responses.pop(0)
            return self._responses[0] if self._responses else ""
        return self._responses

    def complete(
        self,
        messages: Sequence[ChatMessage],
        max_output_tokens: int,
        temperature: float,
    ) -> str:
        with self._lock:
            self.calls.append(
                CompletionRequest(tuple(messages), max_output_tokens, temperature)
            )
            text = self._next_response(messages)
        return _or_fallback(text)

    @property
    def last_request(self) -> CompletionRequest | None:
        return self.calls[-1] if self.calls else None


def get_completion_provider(
    settings: ServiceSettings | None = None,
    use_mock: bool = False,
) -> CompletionProvider:
    """
    Factory function to get the appropriate completion provider.

    Args:
        settings: Completion service settings (required unless use_mock)
        use_mock: If True, return MockCompletion (for testing)
    """
    if use_mock:
        return MockCompletion()
    if settings is None:
        raise ValueError("settings are required for the OpenAI completion provider")
    return OpenAICompletion(settings)

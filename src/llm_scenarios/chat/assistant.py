"""
Minimal chat scenario: one system prompt, one question, one completion.
"""

from __future__ import annotations

from llm_scenarios.core import ChatMessage, CompletionProvider

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful AI assistant. Answer clearly and concisely, "
    "and say so when you are not sure about something."
)


class ChatAssistant:
    """Single-turn assistant. Keeps no history between questions."""

    def __init__(
        self,
        completion: CompletionProvider,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        max_output_tokens: int = 500,
        temperature: float = 0.7,
    ):
        self._completion = completion
        self.system_prompt = system_prompt
        self.max_output_tokens = max_output_tokens
        self.temperature = temperature

    def ask(self, question: str) -> str:
        if not question or not question.strip():
            raise ValueError("question must be non-empty")
        messages = [
            ChatMessage(role="system", content=self.system_prompt),
            ChatMessage(role="user", content=question),
        ]
        return self._completion.complete(
            messages,
            max_output_tokens=self.max_output_tokens,
            temperature=self.temperature,
        )

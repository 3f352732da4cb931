"""Chat module - the minimal single-call scenario."""

from llm_scenarios.chat.assistant import DEFAULT_SYSTEM_PROMPT, ChatAssistant

__all__ = ["DEFAULT_SYSTEM_PROMPT", "ChatAssistant"]

"""
Completion module - chat-style text generation.

1. Protocol (CompletionProvider, in core) defines the interface
2. Production implementation (OpenAICompletion)
3. Test double (MockCompletion) for fast testing
4. Factory function (get_completion_provider)
"""

from llm_scenarios.completion.openai_completion import (
    FALLBACK_RESPONSE,
    CompletionRequest,
    OpenAICompletion,
    MockCompletion,
    get_completion_provider,
)

__all__ = [
    "FALLBACK_RESPONSE",
    "CompletionRequest",
    "OpenAICompletion",
    "MockCompletion",
    "get_completion_provider",
]

"""
Core module - shared protocols, messages and errors.

USAGE:
------
from llm_scenarios.core import CompletionProvider, ChatMessage, UpstreamError

class MyCompletion:
    '''Implements CompletionProvider protocol.'''
    ...
"""

from llm_scenarios.core.errors import (
    LLMScenarioError,
    ConfigurationError,
    UpstreamError,
    EmptyResponseError,
    MalformedResponseError,
)
from llm_scenarios.core.protocols import (
    # Protocols
    EmbeddingProvider,
    VectorIndexProvider,
    CompletionProvider,
    # Data classes
    ChatMessage,
    Role,
)

__all__ = [
    # Errors
    "LLMScenarioError",
    "ConfigurationError",
    "UpstreamError",
    "EmptyResponseError",
    "MalformedResponseError",
    # Protocols
    "EmbeddingProvider",
    "VectorIndexProvider",
    "CompletionProvider",
    # Data classes
    "ChatMessage",
    "Role",
]

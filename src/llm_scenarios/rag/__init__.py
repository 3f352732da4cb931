"""
RAG module - retrieval-augmented generation over the vector index.
"""

from llm_scenarios.rag.orchestrator import (
    DEFAULT_TOP_K,
    RAGOrchestrator,
    seed_index,
)
from llm_scenarios.rag.prompts import (
    INSUFFICIENT_CONTEXT_ANSWER,
    SYSTEM_PROMPT,
    build_messages,
    build_user_message,
    render_context,
    render_document,
)

__all__ = [
    "DEFAULT_TOP_K",
    "RAGOrchestrator",
    "seed_index",
    "INSUFFICIENT_CONTEXT_ANSWER",
    "SYSTEM_PROMPT",
    "build_messages",
    "build_user_message",
    "render_context",
    "render_document",
]

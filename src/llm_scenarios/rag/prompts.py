"""
Prompt construction for the RAG query step.

Rendering is deterministic: the same retrieved documents and question
always produce byte-identical messages.
"""

from __future__ import annotations

from typing import Sequence

from llm_scenarios.core import ChatMessage
from llm_scenarios.retrieval.document import Document

INSUFFICIENT_CONTEXT_ANSWER = "I don't have enough information to answer that question."

SYSTEM_PROMPT = f"""You are a helpful assistant that answers questions using only the provided context.

RULES:
1. Answer ONLY from the information in the context below.
2. If the context does not contain enough information, reply exactly: "{INSUFFICIENT_CONTEXT_ANSWER}"
3. Always cite the source of the information you use."""


def render_document(doc: Document) -> str:
    """Render one document as a four-line block."""
    return "\n".join([
        f"Title: {doc.title}",
        f"Category: {doc.category}",
        f"Source: {doc.source}",
        f"Content: {doc.content}",
    ])


def render_context(documents: Sequence[Document]) -> str:
    """Join rendered documents with a blank line, no trailing separator."""
    return "\n\n".join(render_document(doc) for doc in documents)


def build_user_message(context: str, question: str) -> str:
    """Embed the context and the question in the user turn."""
    return f"""Context:
{context}

Question: {question}"""


def build_messages(documents: Sequence[Document], question: str) -> list[ChatMessage]:
    """System instruction plus a user message carrying context and question."""
    return [
        ChatMessage(role="system", content=SYSTEM_PROMPT),
        ChatMessage(role="user", content=build_user_message(render_context(documents), question)),
    ]

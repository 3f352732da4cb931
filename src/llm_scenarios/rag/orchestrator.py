"""
RAG orchestrator - composes embeddings, vector index and completion.

Two stateless operations:

    ingest:  embed each document's content (sequentially) → one batched upsert
    query:   embed question → top-K search → render context → one completion

Dependencies are INJECTED, so the whole pipeline runs against the
in-memory fakes in tests. No retry, no caching, no conversation memory:
each query is independent and every error propagates to the caller.
"""

from __future__ import annotations

import logging
from typing import Sequence

from llm_scenarios.core import (
    ChatMessage,
    CompletionProvider,
    EmbeddingProvider,
    VectorIndexProvider,
)
from llm_scenarios.observability import (
    RAG_INGESTED_DOC_COUNT,
    RAG_RETRIEVED_DOC_COUNT,
    RAG_RETRIEVED_DOC_IDS,
    RAG_TOP_K,
    get_tracer,
)
from llm_scenarios.rag.prompts import build_messages
from llm_scenarios.retrieval.document import Document

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 3
DEFAULT_MAX_OUTPUT_TOKENS = 800
DEFAULT_TEMPERATURE = 0.3


class RAGOrchestrator:
    """Ingest documents into a vector index and answer questions from them."""

    def __init__(
        self,
        embeddings: EmbeddingProvider,
        index: VectorIndexProvider,
        completion: CompletionProvider,
        max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ):
        self._embeddings = embeddings
        self._index = index
        self._completion = completion
        self.max_output_tokens = max_output_tokens
        self.temperature = temperature
        self.last_prompt: list[ChatMessage] | None = None

    def setup(self) -> None:
        """Make sure the index exists."""
        self._index.ensure_index()

    def close(self) -> None:
        """Release the index connection."""
        self._index.close()

    def ingest(self, documents: Sequence[Document]) -> None:
        """
        Embed every document, then upsert the whole batch once.

        Embeddings are attached in place. If any embedding call fails nothing
        is upserted; if the upsert fails the computed embeddings are not kept
        anywhere for retry.
        """
        documents = list(documents)
        if not documents:
            return

        with get_tracer().start_span("rag.ingest", attributes={RAG_INGESTED_DOC_COUNT: len(documents)}):
            # One embedding call per document, in input order
            vectors = [self._embeddings.embed(doc.content) for doc in documents]
            for doc, vector in zip(documents, vectors):
                doc.embedding = vector

            self._index.upsert(documents)
        logger.info(f"Ingested {len(documents)} documents")

    def retrieve(self, text: str, top_k: int = DEFAULT_TOP_K) -> list[Document]:
        """Embed the question and return the top_k nearest documents."""
        if not text or not text.strip():
            raise ValueError("query text must be non-empty")
        if top_k <= 0:
            raise ValueError(f"top_k must be positive, got {top_k}")

        vector = self._embeddings.embed(text)
        docs = self._index.search(vector, top_k)
        logger.debug(f"Retrieved {len(docs)} documents for query")
        return docs

    def query(self, text: str, top_k: int = DEFAULT_TOP_K) -> str:
        """Answer a question from the indexed documents."""
        with get_tracer().start_span("rag.query", attributes={RAG_TOP_K: top_k}) as span:
            docs = self.retrieve(text, top_k=top_k)
            span.set_attribute(RAG_RETRIEVED_DOC_COUNT, len(docs))
            span.set_attribute(RAG_RETRIEVED_DOC_IDS, ",".join(doc.id for doc in docs))

            messages = build_messages(docs, text)
            self.last_prompt = messages
            return self._completion.complete(
                messages,
                max_output_tokens=self.max_output_tokens,
                temperature=self.temperature,
            )


def seed_index(orchestrator: RAGOrchestrator, documents: Sequence[Document] | None = None) -> int:
    """
    Create the index if needed and ingest the sample documents.

    Returns:
        Number of documents ingested.
    """
    if documents is None:
        from llm_scenarios.retrieval.seeds import get_sample_documents

        documents = get_sample_documents()

    orchestrator.setup()
    orchestrator.ingest(documents)
    return len(documents)

"""
Core protocols defining contracts for the remote collaborators.

Every hosted service this project talks to sits behind one of these
protocols, so the scenarios can run against in-memory fakes in tests.

PATTERN: each protocol has
- a production adapter (OpenAIEmbeddings, PgVectorIndex, OpenAICompletion)
- a test double (MockEmbeddings, InMemoryVectorIndex, MockCompletion)
- a factory function (get_embedding_provider, get_vector_index, ...)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Protocol, Sequence, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from llm_scenarios.retrieval.document import Document


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    """A single role-tagged message sent to the completion service."""
    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


# ---------------------------------------------------------------------------
# EMBEDDING PROVIDER PROTOCOL
# ---------------------------------------------------------------------------


@runtime_checkable
class EmbeddingProvider(Protocol):
    """
    Contract for embedding generation.

    Implementations:
    - OpenAIEmbeddings (production)
    - MockEmbeddings (testing)
    """

    @property
    def dimensions(self) -> int:
        """Fixed output dimensionality D."""
        ...

    def embed(self, text: str) -> np.ndarray:
        """Generate a float32 embedding of length D for a single text."""
        ...


# ---------------------------------------------------------------------------
# VECTOR INDEX PROTOCOL
# ---------------------------------------------------------------------------


@runtime_checkable
class VectorIndexProvider(Protocol):
    """
    Contract for a remote vector index.

    Implementations:
    - PgVectorIndex (production with PostgreSQL + pgvector)
    - InMemoryVectorIndex (testing/development)
    """

    def ensure_index(self) -> None:
        """Create the index if it does not exist. Idempotent."""
        ...

    def upsert(self, documents: Sequence[Document]) -> None:
        """Write all documents (embeddings populated) in one batch."""
        ...

    def search(self, query_vector: np.ndarray, top_k: int) -> list[Document]:
        """Return at most top_k documents ordered by descending similarity."""
        ...

    def close(self) -> None:
        """Release any connection held by the index."""
        ...


# ---------------------------------------------------------------------------
# COMPLETION PROVIDER PROTOCOL
# ---------------------------------------------------------------------------


@runtime_checkable
class CompletionProvider(Protocol):
    """
    Contract for chat-style text generation.

    Implementations:
    - OpenAICompletion (production)
    - MockCompletion (testing)
    """

    def complete(
        self,
        messages: Sequence[ChatMessage],
        max_output_tokens: int,
        temperature: float,
    ) -> str:
        """Generate text for the given messages. Never returns an empty string."""
        ...

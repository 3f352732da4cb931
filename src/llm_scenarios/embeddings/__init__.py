"""
Embeddings module - text embedding generation.

1. Protocol (EmbeddingProvider, in core) defines the interface
2. Production implementation (OpenAIEmbeddings)
3. Test double (MockEmbeddings) for fast testing
4. Factory function (get_embedding_provider)
"""

from llm_scenarios.embeddings.openai_embeddings import (
    MODEL_DIMENSIONS,
    OpenAIEmbeddings,
    MockEmbeddings,
    get_embedding_provider,
)

__all__ = [
    "MODEL_DIMENSIONS",
    "OpenAIEmbeddings",
    "MockEmbeddings",
    "get_embedding_provider",
]

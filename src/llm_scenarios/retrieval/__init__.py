"""
Retrieval module - vector similarity search for RAG.

This module provides:
- Document: The document model
- IndexConfig: Declared index schema
- PgVectorIndex: PostgreSQL production index
- InMemoryVectorIndex: Testing/development index
- get_vector_index(): Factory function
"""

from llm_scenarios.retrieval.document import Document
from llm_scenarios.retrieval.index import (
    IndexConfig,
    PgVectorIndex,
    InMemoryVectorIndex,
    get_vector_index,
)
from llm_scenarios.retrieval.seeds import get_sample_documents

__all__ = [
    # Document
    "Document",
    # Config
    "IndexConfig",
    # Implementations
    "PgVectorIndex",
    "InMemoryVectorIndex",
    # Factory
    "get_vector_index",
    # Seeds
    "get_sample_documents",
]

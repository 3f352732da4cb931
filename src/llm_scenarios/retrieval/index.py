"""
Vector index implementations.

Pattern: Protocol → Production impl → Test double → Factory

This module contains:
1. IndexConfig - Configuration dataclass
2. PgVectorIndex - PostgreSQL with pgvector (production)
3. InMemoryVectorIndex - In-memory index (testing/development)
4. get_vector_index() - Factory function

The index only negotiates its own existence (create-if-absent). Ranking is
whatever the backend's nearest-neighbour search returns; no re-ranking or
tie-breaking happens here.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import Sequence

import numpy as np
import psycopg
from pgvector.psycopg import register_vector

from llm_scenarios.config import DEFAULT_EMBEDDING_DIMENSIONS, ServiceSettings
from llm_scenarios.core import ConfigurationError, UpstreamError, VectorIndexProvider
from llm_scenarios.retrieval.document import Document

logger = logging.getLogger(__name__)

PsycopgError = psycopg.Error
PsycopgDataError = psycopg.DataError

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,62}$")


# ---------------------------------------------------------------------------
# CONFIGURATION
# ---------------------------------------------------------------------------


@dataclass
class IndexConfig:
    """Declared schema of the vector index."""

    name: str = "knowledge_base"
    dimensions: int = DEFAULT_EMBEDDING_DIMENSIONS
    metric: str = "cosine"
    hnsw_m: int = 16
    hnsw_ef_construction: int = 64

    def __post_init__(self) -> None:
        if not _IDENTIFIER.match(self.name):
            raise ConfigurationError(f"Invalid index name: {self.name!r}")
        if self.metric != "cosine":
            raise ConfigurationError(f"Unsupported similarity metric: {self.metric!r}")
        if self.dimensions <= 0:
            raise ConfigurationError(f"Index dimensions must be positive, got {self.dimensions}")


def _check_embeddings(documents: Sequence[Document], dimensions: int) -> None:
    for doc in documents:
        if doc.embedding is None:
            raise ValueError(f"Document {doc.id} has no embedding; ingest it first")
        if len(doc.embedding) != dimensions:
            raise ConfigurationError(
                f"Document {doc.id} embedding has {len(doc.embedding)} dimensions, "
                f"index expects {dimensions}"
            )


def _check_query(query_vector: np.ndarray, top_k: int, dimensions: int) -> None:
    if top_k <= 0:
        raise ValueError(f"top_k must be positive, got {top_k}")
    if len(query_vector) != dimensions:
        raise ConfigurationError(
            f"Query vector has {len(query_vector)} dimensions, index expects {dimensions}"
        )


# ---------------------------------------------------------------------------
# PGVECTOR INDEX (Production)
# ---------------------------------------------------------------------------


class PgVectorIndex:
    """
    PostgreSQL vector index using pgvector.

    The table is the index: id key, text fields, and an embedding column of
    dimension D with an HNSW cosine index on top.
    """

    def __init__(
        self,
        config: IndexConfig,
        connection_string: str,
        password: str | None = None,
    ):
        """
        Args:
            config: Declared index schema
            connection_string: PostgreSQL DSN
            password: Optional password, kept out of the DSN
        """
        self.config = config
        self._connection_string = connection_string
        self._password = password or None
        self._conn = None

    def connect(self) -> None:
        """Establish database connection."""
        kwargs = {"autocommit": True}
        if self._password:
            kwargs["password"] = self._password
        try:
            conn = psycopg.connect(self._connection_string, **kwargs)
        except PsycopgError as e:
            raise UpstreamError("vector index", f"connection failed: {e}") from e
        try:
            conn.execute("CREATE EXTENSION IF NOT EXISTS vector")
            register_vector(conn)
        except PsycopgError as e:
            conn.close()
            raise UpstreamError("vector index", f"connection setup failed: {e}") from e
        self._conn = conn
        logger.debug(f"Connected to vector index '{self.config.name}'")

    def close(self) -> None:
        """Close database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None

    def _connection(self):
        if not self._conn:
            self.connect()
        return self._conn

    def index_exists(self) -> bool:
        """True if the index table is already present."""
        try:
            row = self._connection().execute(
                "SELECT to_regclass(%s)", (self.config.name,)
            ).fetchone()
        except PsycopgError as e:
            raise UpstreamError("vector index", str(e)) from e
        return row is not None and row[0] is not None

    def ensure_index(self) -> None:
        """Create the documents table and HNSW index if absent."""
        if self.index_exists():
            logger.debug(f"Index '{self.config.name}' already exists")
            return

        name = self.config.name
        conn = self._connection()
        try:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {name} (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    content TEXT NOT NULL,
                    category TEXT NOT NULL,
                    source TEXT NOT NULL,
                    embedding vector({self.config.dimensions})
                )
            """
            )
            conn.execute(
                f"""
                CREATE INDEX IF NOT EXISTS {name}_embedding_idx
                ON {name}
                USING hnsw (embedding vector_cosine_ops)
                WITH (m = {self.config.hnsw_m}, ef_construction = {self.config.hnsw_ef_construction})
            """
            )
        except PsycopgError as e:
            raise UpstreamError("vector index", f"index creation failed: {e}") from e
        logger.info(f"Created index '{name}' ({self.config.dimensions} dims, cosine)")

    def upsert(self, documents: Sequence[Document]) -> None:
        """Write every document in a single batch transaction."""
        if not documents:
            return
        _check_embeddings(documents, self.config.dimensions)

        conn = self._connection()
        rows = [
            (doc.id, doc.title, doc.content, doc.category, doc.source, doc.embedding)
            for doc in documents
        ]
        try:
            with conn.transaction():
                with conn.cursor() as cur:
                    cur.executemany(
                        f"""
                        INSERT INTO {self.config.name} (id, title, content, category, source, embedding)
                        VALUES (%s, %s, %s, %s, %s, %s)
                        ON CONFLICT (id) DO UPDATE SET
                            title = EXCLUDED.title,
                            content = EXCLUDED.content,
                            category = EXCLUDED.category,
                            source = EXCLUDED.source,
                            embedding = EXCLUDED.embedding
                        """,
                        rows,
                    )
        except PsycopgDataError as e:
            if "dimensions" in str(e):
                raise ConfigurationError(f"Embedding dimension rejected by index: {e}") from e
            raise UpstreamError("vector index", str(e)) from e
        except PsycopgError as e:
            raise UpstreamError("vector index", f"upsert failed: {e}") from e
        logger.debug(f"Upserted {len(rows)} documents into '{self.config.name}'")

    def search(self, query_vector: np.ndarray, top_k: int) -> list[Document]:
        """Nearest neighbours by cosine distance."""
        _check_query(query_vector, top_k, self.config.dimensions)
        try:
            results = self._connection().execute(
                f"""
                SELECT id, title, content, category, source,
                       embedding <=> %s AS distance
                FROM {self.config.name}
                ORDER BY distance
                LIMIT %s
                """,
                (np.asarray(query_vector, dtype=np.float32), top_k),
            ).fetchall()
        except PsycopgDataError as e:
            if "dimensions" in str(e):
                raise ConfigurationError(f"Query dimension rejected by index: {e}") from e
            raise UpstreamError("vector index", str(e)) from e
        except PsycopgError as e:
            raise UpstreamError("vector index", f"search failed: {e}") from e

        return [
            Document(
                id=row[0],
                title=row[1],
                content=row[2],
                category=row[3],
                source=row[4],
                score=1 - row[5],  # Convert distance to similarity
            )
            for row in results
        ]


# ---------------------------------------------------------------------------
# IN-MEMORY INDEX (Testing/Development)
# ---------------------------------------------------------------------------


class InMemoryVectorIndex:
    """
    In-memory vector index for development/testing.

    Same contract as PgVectorIndex without Postgres. Exact cosine ranking.
    `create_calls` counts how many times the schema was actually created.
    """

    def __init__(self, config: IndexConfig | None = None):
        self.config = config or IndexConfig()
        self.create_calls = 0
        self.upsert_calls = 0
        self._exists = False
        self._documents: dict[str, Document] = {}

    @property
    def exists(self) -> bool:
        return self._exists

    @property
    def document_ids(self) -> list[str]:
        return list(self._documents)

    def close(self) -> None:
        pass

    def ensure_index(self) -> None:
        """Create on first call, no-op afterwards."""
        if self._exists:
            return
        self._exists = True
        self.create_calls += 1

    def upsert(self, documents: Sequence[Document]) -> None:
        """Store copies of the documents keyed by id."""
        if not self._exists:
            raise UpstreamError("vector index", f"index '{self.config.name}' does not exist")
        _check_embeddings(documents, self.config.dimensions)
        self.upsert_calls += 1
        for doc in documents:
            self._documents[doc.id] = replace(doc, score=None)

    def _cosine_similarity(self, a: np.ndarray, b: np.ndarray) -> float:
        """Calculate cosine similarity between two vectors."""
        norm = np.linalg.norm(a) * np.linalg.norm(b)
        if norm == 0:
            return 0.0
        return float(np.dot(a, b) / norm)

    def search(self, query_vector: np.ndarray, top_k: int) -> list[Document]:
        """Search using cosine similarity."""
        if not self._exists:
            raise UpstreamError("vector index", f"index '{self.config.name}' does not exist")
        _check_query(query_vector, top_k, self.config.dimensions)

        scored = [
            (doc, self._cosine_similarity(query_vector, doc.embedding))
            for doc in self._documents.values()
        ]
        scored.sort(key=lambda x: x[1], reverse=True)

        return [
            replace(doc, embedding=None, score=score)
            for doc, score in scored[:top_k]
        ]


# ---------------------------------------------------------------------------
# FACTORY FUNCTION
# ---------------------------------------------------------------------------


def get_vector_index(
    settings: ServiceSettings | None = None,
    dimensions: int = DEFAULT_EMBEDDING_DIMENSIONS,
    use_memory: bool = False,
) -> VectorIndexProvider:
    """
    Factory function to get the appropriate vector index.

    Args:
        settings: Vector index settings; endpoint is the DSN, deployment the index name
        dimensions: Embedding dimensionality D the index is declared with
        use_memory: Use the in-memory index (no database)
    """
    if use_memory:
        name = settings.deployment if settings else "knowledge_base"
        return InMemoryVectorIndex(IndexConfig(name=name, dimensions=dimensions))
    if settings is None:
        raise ValueError("settings are required for the pgvector index")
    return PgVectorIndex(
        IndexConfig(name=settings.deployment, dimensions=dimensions),
        connection_string=settings.endpoint,
        password=settings.api_key,
    )

"""
Document model for the retrieval system.

Single responsibility: Define the structure of documents
stored in vector indexes.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

import numpy as np


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Document:
    """
    A knowledge-base document.

    Constructed without an embedding; the ingest step attaches one exactly
    once before the document is handed to the vector index. `score` is only
    set on documents returned from a search.
    """
    title: str
    content: str
    category: str
    source: str
    id: str = field(default_factory=_new_id)
    embedding: np.ndarray | None = None
    score: float | None = None

    def __post_init__(self) -> None:
        if not self.id:
            self.id = _new_id()

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization (embedding omitted)."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "category": self.category,
            "source": self.source,
            "score": self.score,
        }

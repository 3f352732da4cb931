"""
Embeddings Module - Single Responsibility: Generate text embeddings.

It has ONE job: convert text to a fixed-length float32 vector.
No index logic, no document handling, no caching. Every call to embed()
is one outbound request.
"""

from __future__ import annotations

import hashlib
import logging

import numpy as np
from openai import OpenAI, OpenAIError

from llm_scenarios.config import DEFAULT_EMBEDDING_DIMENSIONS, ServiceSettings
from llm_scenarios.core import EmbeddingProvider, UpstreamError
from llm_scenarios.core.openai_client import create_openai_client

logger = logging.getLogger(__name__)

MODEL_DIMENSIONS = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}

# Only the text-embedding-3 family accepts a `dimensions` request parameter
FIXED_DIMENSION_MODELS = {"text-embedding-ada-002"}


class OpenAIEmbeddings:
    """
    OpenAI / Azure OpenAI embedding provider.

    The deployment name doubles as the model name on Azure. Dimensions come
    from the known-model table unless given explicitly. Whenever the model
    supports it, the dimension is sent with the request, and every returned
    vector is checked against it.
    """

    def __init__(
        self,
        settings: ServiceSettings,
        dimensions: int | None = None,
        client: OpenAI | None = None,
    ):
        self.model = settings.deployment
        self._dimensions = dimensions or MODEL_DIMENSIONS.get(
            self.model, DEFAULT_EMBEDDING_DIMENSIONS
        )
        self._send_dimensions = self.model not in FIXED_DIMENSION_MODELS and (
            self.model.startswith("text-embedding-3") or dimensions is not None
        )
        self._client = client or create_openai_client(settings)

    @property
    def dimensions(self) -> int:
        """Return embedding dimensions for the model."""
        return self._dimensions

    def embed(self, text: str) -> np.ndarray:
        """
        Generate embedding for a single text.

        Raises:
            UpstreamError: on transport, auth, rate-limit or malformed responses,
                including a vector whose length is not `dimensions`.
        """
        logger.debug(f"Embedding {len(text)} chars with {self.model}")
        request = {"input": [text], "model": self.model}
        if self._send_dimensions:
            request["dimensions"] = self._dimensions
        try:
            response = self._client.embeddings.create(**request)
        except OpenAIError as e:
            raise UpstreamError("embedding", str(e)) from e

        if not response.data:
            raise UpstreamError("embedding", "response contained no embeddings")
        vector = np.asarray(response.data[0].embedding, dtype=np.float32)
        if vector.shape != (self._dimensions,):
            raise UpstreamError(
                "embedding",
                f"expected {self._dimensions} dimensions from {self.model}, got {vector.size}",
            )
        return vector


class MockEmbeddings:
    """
    Mock embedding provider for testing without API calls.

    Generates deterministic pseudo-embeddings from text hashes.
    NOT for production use - only for testing/development.
    """

    def __init__(self, dimensions: int = DEFAULT_EMBEDDING_DIMENSIONS):
        self._dimensions = dimensions
        self.calls: list[str] = []

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def embed(self, text: str) -> np.ndarray:
        """Generate deterministic pseudo-embedding from text hash."""
        self.calls.append(text)
        seed = int.from_bytes(hashlib.sha256(text.encode()).digest()[:8], "big")
        rng = np.random.default_rng(seed)
        return rng.standard_normal(self._dimensions).astype(np.float32)


def get_embedding_provider(
    settings: ServiceSettings | None = None,
    use_mock: bool = False,
    dimensions: int | None = None,
) -> EmbeddingProvider:
    """
    Factory function to get the appropriate embedding provider.

    Args:
        settings: Embedding service settings (required unless use_mock)
        use_mock: If True, return MockEmbeddings (for testing)
        dimensions: Override the model's output dimensionality
    """
    if use_mock:
        return MockEmbeddings(dimensions or DEFAULT_EMBEDDING_DIMENSIONS)
    if settings is None:
        raise ValueError("settings are required for the OpenAI embedding provider")
    return OpenAIEmbeddings(settings, dimensions=dimensions)

"""
Unit Tests for Embedding Providers

The OpenAI SDK client is injected as a MagicMock, so no network call is made.
"""

import pytest
from unittest.mock import MagicMock, patch
import numpy as np
from openai import AzureOpenAI, OpenAI, OpenAIError

from llm_scenarios.config import ServiceSettings
from llm_scenarios.core import EmbeddingProvider, UpstreamError
from llm_scenarios.core.openai_client import create_openai_client
from llm_scenarios.embeddings import (
    MockEmbeddings,
    OpenAIEmbeddings,
    get_embedding_provider,
)


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------


@pytest.fixture
def settings():
    return ServiceSettings(
        endpoint="https://example.openai.azure.com",
        api_key="test-key",
        deployment="text-embedding-3-small",
    )


@pytest.fixture
def mock_client():
    """OpenAI client returning a 1536-dim embedding."""
    client = MagicMock()
    item = MagicMock()
    item.embedding = [0.25] * 1536
    client.embeddings.create.return_value = MagicMock(data=[item])
    return client


# ---------------------------------------------------------------------------
# OPENAI EMBEDDINGS
# ---------------------------------------------------------------------------


class TestOpenAIEmbeddings:
    """Test the production adapter with a mocked SDK client."""

    def test_embed_returns_float32_vector_of_dimension(self, settings, mock_client):
        embeddings = OpenAIEmbeddings(settings, client=mock_client)

        vector = embeddings.embed("What is Azure OpenAI Service?")

        assert vector.dtype == np.float32
        assert vector.shape == (embeddings.dimensions,)

    def test_request_shape(self, settings, mock_client):
        embeddings = OpenAIEmbeddings(settings, client=mock_client)

        embeddings.embed("hello")

        mock_client.embeddings.create.assert_called_once_with(
            input=["hello"],
            model="text-embedding-3-small",
            dimensions=1536,
        )

    def test_ada_request_omits_dimensions(self, mock_client):
        ada = ServiceSettings(endpoint="https://x", api_key="k", deployment="text-embedding-ada-002")

        OpenAIEmbeddings(ada, client=mock_client).embed("hello")

        assert "dimensions" not in mock_client.embeddings.create.call_args.kwargs

    def test_large_model_returns_its_dimensions(self, mock_client):
        mock_client.embeddings.create.return_value.data[0].embedding = [0.1] * 3072
        large = ServiceSettings(endpoint="https://x", api_key="k", deployment="text-embedding-3-large")
        embeddings = OpenAIEmbeddings(large, client=mock_client)

        vector = embeddings.embed("hello")

        assert len(vector) == embeddings.dimensions == 3072
        assert mock_client.embeddings.create.call_args.kwargs["dimensions"] == 3072

    def test_override_is_sent_to_service(self, settings, mock_client):
        mock_client.embeddings.create.return_value.data[0].embedding = [0.1] * 256
        embeddings = OpenAIEmbeddings(settings, dimensions=256, client=mock_client)

        assert embeddings.embed("hello").shape == (256,)
        assert mock_client.embeddings.create.call_args.kwargs["dimensions"] == 256

    def test_wrong_length_vector_is_upstream_error(self, settings, mock_client):
        mock_client.embeddings.create.return_value.data[0].embedding = [0.1] * 3072
        embeddings = OpenAIEmbeddings(settings, client=mock_client)

        with pytest.raises(UpstreamError) as exc_info:
            embeddings.embed("hello")

        assert "expected 1536" in str(exc_info.value)

    def test_no_caching(self, settings, mock_client):
        """Identical text still goes to the remote service every time."""
        embeddings = OpenAIEmbeddings(settings, client=mock_client)

        embeddings.embed("same")
        embeddings.embed("same")

        assert mock_client.embeddings.create.call_count == 2

    def test_sdk_error_becomes_upstream_error(self, settings, mock_client):
        mock_client.embeddings.create.side_effect = OpenAIError("rate limited")
        embeddings = OpenAIEmbeddings(settings, client=mock_client)

        with pytest.raises(UpstreamError) as exc_info:
            embeddings.embed("hello")

        assert exc_info.value.service == "embedding"
        assert isinstance(exc_info.value.__cause__, OpenAIError)

    def test_empty_response_is_upstream_error(self, settings, mock_client):
        mock_client.embeddings.create.return_value = MagicMock(data=[])
        embeddings = OpenAIEmbeddings(settings, client=mock_client)

        with pytest.raises(UpstreamError):
            embeddings.embed("hello")

    def test_known_model_dimensions(self, mock_client):
        large = ServiceSettings(endpoint="https://x", api_key="k", deployment="text-embedding-3-large")

        assert OpenAIEmbeddings(large, client=mock_client).dimensions == 3072

    def test_explicit_dimensions_override(self, settings, mock_client):
        assert OpenAIEmbeddings(settings, dimensions=256, client=mock_client).dimensions == 256


# ---------------------------------------------------------------------------
# MOCK EMBEDDINGS
# ---------------------------------------------------------------------------


class TestMockEmbeddings:
    """Test the deterministic test double."""

    def test_shape_invariant(self):
        embeddings = MockEmbeddings(dimensions=64)

        for text in ["a", "longer text about vectors", "ünïcödé"]:
            assert embeddings.embed(text).shape == (64,)

    def test_deterministic(self):
        embeddings = MockEmbeddings(dimensions=32)

        assert np.array_equal(embeddings.embed("x"), embeddings.embed("x"))
        assert not np.array_equal(embeddings.embed("x"), embeddings.embed("y"))

    def test_records_calls(self):
        embeddings = MockEmbeddings(dimensions=8)
        embeddings.embed("first")
        embeddings.embed("second")

        assert embeddings.calls == ["first", "second"]

    def test_satisfies_protocol(self):
        assert isinstance(MockEmbeddings(), EmbeddingProvider)


# ---------------------------------------------------------------------------
# FACTORY AND CLIENT CONSTRUCTION
# ---------------------------------------------------------------------------


class TestFactory:

    def test_mock(self):
        provider = get_embedding_provider(use_mock=True, dimensions=16)

        assert isinstance(provider, MockEmbeddings)
        assert provider.dimensions == 16

    def test_production_requires_settings(self):
        with pytest.raises(ValueError):
            get_embedding_provider()

    def test_production(self, settings):
        with patch("llm_scenarios.embeddings.openai_embeddings.create_openai_client") as create:
            provider = get_embedding_provider(settings)

        assert isinstance(provider, OpenAIEmbeddings)
        create.assert_called_once_with(settings)


class TestCreateOpenAIClient:

    def test_azure_when_api_version_set(self, settings):
        assert isinstance(create_openai_client(settings), AzureOpenAI)

    def test_plain_openai_without_api_version(self):
        settings = ServiceSettings(
            endpoint="http://localhost:8080/v1",
            api_key="k",
            deployment="m",
            api_version=None,
        )

        client = create_openai_client(settings)

        assert type(client) is OpenAI
        assert str(client.base_url).startswith("http://localhost:8080/v1")

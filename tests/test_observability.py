"""
Unit Tests for Observability Module

Tests the Phoenix/OpenTelemetry integration with focus on:
1. Tracing is off by default (NoOpTracer)
2. Configuration loading from environment
3. Phoenix setup and teardown with the exporter mocked out
4. RAG spans recorded through an in-memory OTel exporter
"""

import pytest
from unittest.mock import MagicMock, patch

from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from llm_scenarios.completion import MockCompletion
from llm_scenarios.core import UpstreamError
from llm_scenarios.embeddings import MockEmbeddings
from llm_scenarios.observability import (
    RAG_RETRIEVED_DOC_COUNT,
    RAG_TOP_K,
    NoOpSpan,
    NoOpTracer,
    OTelTracer,
    PhoenixConfig,
    get_tracer,
    init_phoenix,
    reset_tracer,
    shutdown_phoenix,
    use_tracer_provider,
)
from llm_scenarios.rag import RAGOrchestrator, seed_index
from llm_scenarios.retrieval import IndexConfig, InMemoryVectorIndex

INSTRUMENTATION = "llm_scenarios.observability.instrumentation"


@pytest.fixture(autouse=True)
def clean_tracer():
    reset_tracer()
    yield
    shutdown_phoenix()
    reset_tracer()


# ---------------------------------------------------------------------------
# CONFIG TESTS
# ---------------------------------------------------------------------------


class TestPhoenixConfig:
    """Test configuration loading."""

    def test_config_defaults(self):
        config = PhoenixConfig.from_env({})

        assert config.enabled is False
        assert config.project_name == "llm-scenarios"
        assert config.collector_endpoint is None
        assert config.capture_llm_content is False

    @pytest.mark.parametrize("value", ["true", "1", "yes", "TRUE"])
    def test_enabled_values(self, value):
        assert PhoenixConfig.from_env({"PHOENIX_ENABLED": value}).enabled is True

    @pytest.mark.parametrize("value", ["false", "0", "no", ""])
    def test_disabled_values(self, value):
        assert PhoenixConfig.from_env({"PHOENIX_ENABLED": value}).enabled is False

    def test_config_from_env(self):
        config = PhoenixConfig.from_env({
            "PHOENIX_PROJECT_NAME": "my-project",
            "PHOENIX_COLLECTOR_ENDPOINT": "https://phoenix.example.com/v1/traces",
            "PHOENIX_CAPTURE_LLM_CONTENT": "true",
        })

        assert config.project_name == "my-project"
        assert config.collector_endpoint == "https://phoenix.example.com/v1/traces"
        assert config.capture_llm_content is True


# ---------------------------------------------------------------------------
# NOOP TRACER TESTS
# ---------------------------------------------------------------------------


class TestNoOpTracer:
    """Tracing disabled must cost nothing and raise nothing."""

    def test_default_tracer_is_noop(self):
        assert isinstance(get_tracer(), NoOpTracer)

    def test_noop_span_accepts_everything(self):
        with NoOpTracer().start_span("test_span", attributes={"count": 5}) as span:
            assert isinstance(span, NoOpSpan)
            span.set_attribute("key", "value")
            span.set_status("error", "Something went wrong")
            span.record_exception(ValueError("test error"))

    def test_exceptions_propagate(self):
        with pytest.raises(ValueError):
            with NoOpTracer().start_span("test_span"):
                raise ValueError("boom")


# ---------------------------------------------------------------------------
# PHOENIX SETUP
# ---------------------------------------------------------------------------


class TestInitPhoenix:

    def test_disabled_does_nothing(self):
        with patch(f"{INSTRUMENTATION}.register") as mock_register:
            assert init_phoenix(PhoenixConfig(enabled=False)) is False

        mock_register.assert_not_called()
        assert isinstance(get_tracer(), NoOpTracer)

    def test_enabled_registers_and_instruments(self):
        provider = MagicMock()
        config = PhoenixConfig(enabled=True, project_name="demo", collector_endpoint="http://collector:6006/v1/traces")

        with patch(f"{INSTRUMENTATION}.register", return_value=provider) as mock_register:
            with patch(f"{INSTRUMENTATION}.OpenAIInstrumentor") as mock_instrumentor:
                assert init_phoenix(config) is True
                assert init_phoenix(config) is True

                mock_register.assert_called_once_with(
                    project_name="demo",
                    endpoint="http://collector:6006/v1/traces",
                    set_global_tracer_provider=False,
                )
                instrument_kwargs = mock_instrumentor.return_value.instrument.call_args.kwargs
                assert instrument_kwargs["tracer_provider"] is provider
                assert instrument_kwargs["config"].hide_inputs is True
                assert isinstance(get_tracer(), OTelTracer)

                shutdown_phoenix()

        provider.shutdown.assert_called_once()
        mock_instrumentor.return_value.uninstrument.assert_called_once()
        assert isinstance(get_tracer(), NoOpTracer)

    def test_setup_failure_falls_back_to_noop(self, caplog):
        with patch(f"{INSTRUMENTATION}.register", side_effect=RuntimeError("collector unreachable")):
            assert init_phoenix(PhoenixConfig(enabled=True)) is False

        assert "Failed to initialize Phoenix" in caplog.text
        assert isinstance(get_tracer(), NoOpTracer)

    def test_shutdown_without_init_is_noop(self):
        shutdown_phoenix()

        assert isinstance(get_tracer(), NoOpTracer)


# ---------------------------------------------------------------------------
# RAG SPANS
# ---------------------------------------------------------------------------


class TestRagSpans:

    @pytest.fixture
    def exporter(self):
        exporter = InMemorySpanExporter()
        provider = TracerProvider()
        provider.add_span_processor(SimpleSpanProcessor(exporter))
        use_tracer_provider(provider)
        return exporter

    def test_ingest_and_query_spans(self, exporter):
        rag = RAGOrchestrator(
            MockEmbeddings(dimensions=16),
            InMemoryVectorIndex(IndexConfig(dimensions=16)),
            MockCompletion("answer"),
        )
        seed_index(rag)

        rag.query("What is RAG?", top_k=2)

        spans = {span.name: span for span in exporter.get_finished_spans()}
        assert set(spans) == {"rag.ingest", "rag.query"}
        assert spans["rag.query"].attributes[RAG_TOP_K] == 2
        assert spans["rag.query"].attributes[RAG_RETRIEVED_DOC_COUNT] == 2

    def test_failed_query_span_records_error(self, exporter):
        rag = RAGOrchestrator(
            MockEmbeddings(dimensions=16),
            InMemoryVectorIndex(IndexConfig(dimensions=16)),
            MockCompletion("answer"),
        )

        with pytest.raises(UpstreamError):
            rag.query("index was never created")

        (span,) = exporter.get_finished_spans()
        assert span.name == "rag.query"
        assert not span.status.is_ok

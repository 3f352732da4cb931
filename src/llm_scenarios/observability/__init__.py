"""
Observability Module - Phoenix + OpenTelemetry Integration

Opt-in tracing of every scenario run and every OpenAI call, exported to
Arize Phoenix. Off unless PHOENIX_ENABLED=true; while off, get_tracer()
hands out no-op spans.

USAGE:
------
from llm_scenarios.observability import init_phoenix, get_tracer

init_phoenix()

with get_tracer().start_span("my_operation", attributes={"key": "value"}) as span:
    span.set_attribute("result", "success")
"""

from llm_scenarios.observability.attributes import (
    GEN_AI_REQUEST_MODEL,
    GEN_AI_SYSTEM,
    RAG_INGESTED_DOC_COUNT,
    RAG_RETRIEVED_DOC_COUNT,
    RAG_RETRIEVED_DOC_IDS,
    RAG_TOP_K,
    SCENARIO_MOCK,
    SCENARIO_NAME,
)
from llm_scenarios.observability.config import PhoenixConfig
from llm_scenarios.observability.instrumentation import init_phoenix, shutdown_phoenix
from llm_scenarios.observability.tracer import (
    NoOpSpan,
    NoOpTracer,
    OTelTracer,
    SpanProtocol,
    TracerProtocol,
    get_tracer,
    reset_tracer,
    use_tracer_provider,
)

__all__ = [
    "init_phoenix",
    "shutdown_phoenix",
    "PhoenixConfig",
    "TracerProtocol",
    "SpanProtocol",
    "NoOpTracer",
    "NoOpSpan",
    "OTelTracer",
    "get_tracer",
    "reset_tracer",
    "use_tracer_provider",
    "GEN_AI_SYSTEM",
    "GEN_AI_REQUEST_MODEL",
    "SCENARIO_NAME",
    "SCENARIO_MOCK",
    "RAG_TOP_K",
    "RAG_RETRIEVED_DOC_COUNT",
    "RAG_RETRIEVED_DOC_IDS",
    "RAG_INGESTED_DOC_COUNT",
]

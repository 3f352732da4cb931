"""
Phoenix setup and OpenInference auto-instrumentation.

Every OpenAI SDK call (chat completions and embeddings) is traced without
code changes once init_phoenix() has run.
"""

from __future__ import annotations

import logging
from typing import Any

from openinference.instrumentation import TraceConfig
from openinference.instrumentation.openai import OpenAIInstrumentor
from phoenix.otel import register

from llm_scenarios.observability.config import PhoenixConfig
from llm_scenarios.observability.tracer import reset_tracer, use_tracer_provider

logger = logging.getLogger(__name__)

_provider: Any = None


def init_phoenix(config: PhoenixConfig | None = None) -> bool:
    """
    Initialize Phoenix observability.

    Call once at startup, before any LLM call. Registers an OTLP tracer
    provider for the project and instruments the OpenAI SDK.

    Args:
        config: Optional config (uses env vars if not provided)

    Returns:
        True if Phoenix was initialized, False if disabled or failed
    """
    global _provider
    if _provider is not None:
        return True

    config = config or PhoenixConfig.from_env()
    if not config.enabled:
        logger.debug("Phoenix observability disabled")
        return False

    try:
        provider = register(
            project_name=config.project_name,
            endpoint=config.collector_endpoint,
            set_global_tracer_provider=False,
        )
        trace_config = TraceConfig(
            hide_inputs=not config.capture_llm_content,
            hide_outputs=not config.capture_llm_content,
        )
        OpenAIInstrumentor().instrument(tracer_provider=provider, config=trace_config)
    except Exception as e:
        logger.error(f"Failed to initialize Phoenix: {e}")
        return False

    use_tracer_provider(provider)
    _provider = provider
    logger.info(f"Phoenix tracing enabled for project '{config.project_name}'")
    return True


def shutdown_phoenix() -> None:
    """Flush spans, remove the instrumentation and reset the tracer."""
    global _provider
    if _provider is None:
        return

    try:
        OpenAIInstrumentor().uninstrument()
        _provider.shutdown()
    except Exception as e:
        logger.warning(f"Error shutting down Phoenix: {e}")
    finally:
        reset_tracer()
        _provider = None

"""
Phoenix/OpenTelemetry Configuration

Loads observability settings from environment variables. Tracing is off
unless PHOENIX_ENABLED is set.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

_TRUTHY = ("true", "1", "yes")


@dataclass(frozen=True)
class PhoenixConfig:
    """Configuration for Phoenix observability.

    Environment Variables:
        PHOENIX_ENABLED: Enable Phoenix tracing (default: false)
        PHOENIX_PROJECT_NAME: Project name in Phoenix UI (default: llm-scenarios)
        PHOENIX_COLLECTOR_ENDPOINT: Collector endpoint (optional, local Phoenix if empty)
        PHOENIX_CAPTURE_LLM_CONTENT: Export prompts/responses (default: false)

    PRIVACY WARNING:
        Setting PHOENIX_CAPTURE_LLM_CONTENT=true exports raw prompts, retrieved
        documents and responses to the collector.
    """

    enabled: bool = False
    project_name: str = "llm-scenarios"
    collector_endpoint: str | None = None
    capture_llm_content: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "PhoenixConfig":
        """Load config from environment variables."""
        environ = os.environ if environ is None else environ
        return cls(
            enabled=environ.get("PHOENIX_ENABLED", "false").lower() in _TRUTHY,
            project_name=environ.get("PHOENIX_PROJECT_NAME") or "llm-scenarios",
            collector_endpoint=environ.get("PHOENIX_COLLECTOR_ENDPOINT") or None,
            capture_llm_content=environ.get("PHOENIX_CAPTURE_LLM_CONTENT", "false").lower() in _TRUTHY,
        )

"""
OpenAI SDK client construction shared by the embedding and completion adapters.

Azure-hosted deployments need an API version and the resource endpoint;
plain OpenAI-compatible endpoints only need a base URL.
"""

from __future__ import annotations

from openai import AzureOpenAI, OpenAI

from llm_scenarios.config import ServiceSettings


def create_openai_client(settings: ServiceSettings) -> OpenAI:
    """Build the SDK client for a service. Makes no network call."""
    if settings.api_version:
        return AzureOpenAI(
            azure_endpoint=settings.endpoint,
            api_key=settings.api_key,
            api_version=settings.api_version,
        )
    return OpenAI(base_url=settings.endpoint, api_key=settings.api_key)

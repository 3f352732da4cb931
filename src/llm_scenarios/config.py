"""
Service configuration loaded from environment variables.

One ServiceSettings per remote service. The AppConfig is built once at
startup and handed to each client constructor; nothing here is cached in
module state.

Environment Variables:
    COMPLETION_ENDPOINT, COMPLETION_API_KEY, COMPLETION_DEPLOYMENT,
    COMPLETION_API_VERSION (optional; unset means 2024-06-01, set but empty
    selects a plain OpenAI-compatible endpoint instead of Azure)

    EMBEDDING_ENDPOINT, EMBEDDING_API_KEY, EMBEDDING_DEPLOYMENT,
    EMBEDDING_API_VERSION (optional), EMBEDDING_DIMENSIONS (optional;
    defaults to the native size of the embedding model)

    VECTOR_INDEX_ENDPOINT (PostgreSQL DSN), VECTOR_INDEX_API_KEY (optional
    password), VECTOR_INDEX_NAME
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from llm_scenarios.core.errors import ConfigurationError

DEFAULT_API_VERSION = "2024-06-01"
DEFAULT_EMBEDDING_DIMENSIONS = 1536


@dataclass(frozen=True)
class ServiceSettings:
    """Connection settings for a single remote service."""

    endpoint: str
    api_key: str
    deployment: str
    api_version: str | None = DEFAULT_API_VERSION

    def __repr__(self) -> str:
        # Keep keys out of logs and tracebacks
        return (
            f"ServiceSettings(endpoint={self.endpoint!r}, api_key='***', "
            f"deployment={self.deployment!r}, api_version={self.api_version!r})"
        )


def _read(environ: Mapping[str, str], key: str) -> str:
    return (environ.get(key) or "").strip()


def _api_version(environ: Mapping[str, str], key: str) -> str | None:
    # An explicitly empty version means "not Azure"
    if key not in environ:
        return DEFAULT_API_VERSION
    return _read(environ, key) or None


@dataclass(frozen=True)
class AppConfig:
    """All settings needed by the scenarios."""

    completion: ServiceSettings
    embedding: ServiceSettings
    vector_index: ServiceSettings
    embedding_dimensions: int | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppConfig":
        """
        Load config from environment variables.

        Raises:
            ConfigurationError: listing every missing required key.
        """
        environ = os.environ if environ is None else environ
        missing: list[str] = []

        def require(key: str) -> str:
            value = _read(environ, key)
            if not value:
                missing.append(key)
            return value

        def llm_service(prefix: str) -> ServiceSettings:
            return ServiceSettings(
                endpoint=require(f"{prefix}_ENDPOINT"),
                api_key=require(f"{prefix}_API_KEY"),
                deployment=require(f"{prefix}_DEPLOYMENT"),
                api_version=_api_version(environ, f"{prefix}_API_VERSION"),
            )

        completion = llm_service("COMPLETION")
        embedding = llm_service("EMBEDDING")
        vector_index = ServiceSettings(
            endpoint=require("VECTOR_INDEX_ENDPOINT"),
            api_key=_read(environ, "VECTOR_INDEX_API_KEY"),
            deployment=require("VECTOR_INDEX_NAME"),
            api_version=None,
        )

        raw_dims = _read(environ, "EMBEDDING_DIMENSIONS")
        try:
            dimensions = int(raw_dims) if raw_dims else None
        except ValueError:
            raise ConfigurationError(
                f"EMBEDDING_DIMENSIONS must be an integer, got {raw_dims!r}"
            ) from None
        if dimensions is not None and dimensions <= 0:
            raise ConfigurationError(
                f"EMBEDDING_DIMENSIONS must be positive, got {dimensions}"
            )

        if missing:
            raise ConfigurationError(
                f"Missing required settings: {', '.join(missing)}",
                missing_keys=missing,
            )

        return cls(
            completion=completion,
            embedding=embedding,
            vector_index=vector_index,
            embedding_dimensions=dimensions,
        )


def completion_only_from_env(environ: Mapping[str, str] | None = None) -> ServiceSettings:
    """
    Load just the completion settings.

    The chat, analytics and text scenarios never touch the embedding or
    vector index services, so they should not fail on those keys.
    """
    environ = os.environ if environ is None else environ
    keys = ["COMPLETION_ENDPOINT", "COMPLETION_API_KEY", "COMPLETION_DEPLOYMENT"]
    missing = [key for key in keys if not _read(environ, key)]
    if missing:
        raise ConfigurationError(
            f"Missing required settings: {', '.join(missing)}",
            missing_keys=missing,
        )
    return ServiceSettings(
        endpoint=_read(environ, "COMPLETION_ENDPOINT"),
        api_key=_read(environ, "COMPLETION_API_KEY"),
        deployment=_read(environ, "COMPLETION_DEPLOYMENT"),
        api_version=_api_version(environ, "COMPLETION_API_VERSION"),
    )

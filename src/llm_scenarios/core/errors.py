"""
Error taxonomy shared by every scenario.

Library and service layers raise these and let them propagate unchanged.
Only the interactive CLI loop catches them, logs, and moves on to the next
user input.

    LLMScenarioError
    ├── ConfigurationError      missing/invalid settings, fatal at startup
    ├── UpstreamError           any failure from a remote service call
    ├── EmptyResponseError      completion came back without text
    └── MalformedResponseError  generated text did not contain the expected JSON
"""

from __future__ import annotations


class LLMScenarioError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(LLMScenarioError):
    """Required settings are missing or inconsistent with the remote service."""

    def __init__(self, message: str, missing_keys: list[str] | None = None):
        super().__init__(message)
        self.missing_keys = missing_keys or []


class UpstreamError(LLMScenarioError):
    """A remote call (network, auth, rate limit, malformed response) failed."""

    def __init__(self, service: str, message: str):
        super().__init__(f"{service}: {message}")
        self.service = service


class EmptyResponseError(LLMScenarioError):
    """The completion service returned no text."""


class MalformedResponseError(LLMScenarioError):
    """Generated text was expected to carry a JSON payload but did not."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text

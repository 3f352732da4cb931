"""
Best-effort extraction of JSON payloads from generated text.

Models asked for JSON often wrap it in prose or code fences. We take the
span from the first opening bracket to the last matching closing bracket
and try to parse it. Callers either handle MalformedResponseError or use
try_extract_json() and fall back to a default structure.
"""

from __future__ import annotations

import json
from typing import Any

from llm_scenarios.core import MalformedResponseError

_BRACKETS = {dict: ("{", "}"), list: ("[", "]")}


def extract_json(text: str, expect: type = dict) -> Any:
    """
    Parse the outermost JSON object (or array) embedded in text.

    Args:
        text: Generated text
        expect: dict or list

    Raises:
        MalformedResponseError: no span found, invalid JSON, or wrong type.
    """
    if expect not in _BRACKETS:
        raise ValueError(f"expect must be dict or list, got {expect!r}")
    opening, closing = _BRACKETS[expect]

    start = text.find(opening)
    end = text.rfind(closing)
    if start == -1 or end <= start:
        raise MalformedResponseError(f"no JSON {expect.__name__} found in response", text)

    try:
        payload = json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"invalid JSON in response: {e}", text) from e

    if not isinstance(payload, expect):
        raise MalformedResponseError(
            f"expected JSON {expect.__name__}, got {type(payload).__name__}", text
        )
    return payload


def try_extract_json(text: str, expect: type = dict) -> Any | None:
    """Like extract_json(), but returns None instead of raising."""
    try:
        return extract_json(text, expect)
    except MalformedResponseError:
        return None

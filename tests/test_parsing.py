"""
Unit Tests for best-effort JSON extraction from generated text.
"""

import pytest

from llm_scenarios.core import MalformedResponseError
from llm_scenarios.parsing import extract_json, try_extract_json


class TestExtractJson:

    def test_object_wrapped_in_prose(self):
        text = 'Here are the results:\n{"row_count": 10, "notes": ["ok"]}\nHope this helps!'

        assert extract_json(text) == {"row_count": 10, "notes": ["ok"]}

    def test_object_in_code_fence(self):
        text = '```json\n{"sentiment": "positive", "confidence": 0.8}\n```'

        assert extract_json(text)["sentiment"] == "positive"

    def test_array(self):
        assert extract_json('Keywords: ["azure", "search"]', expect=list) == ["azure", "search"]

    def test_no_payload(self):
        with pytest.raises(MalformedResponseError) as exc_info:
            extract_json("I could not compute that.")

        assert exc_info.value.raw_text == "I could not compute that."

    def test_invalid_json(self):
        with pytest.raises(MalformedResponseError):
            extract_json("{row_count: ten}")

    def test_reversed_brackets(self):
        with pytest.raises(MalformedResponseError):
            extract_json("} nothing here {")

    def test_array_expected_but_object_given(self):
        with pytest.raises(MalformedResponseError):
            extract_json('{"a": 1}', expect=list)

    def test_unsupported_expectation(self):
        with pytest.raises(ValueError):
            extract_json("{}", expect=str)


class TestTryExtractJson:

    def test_returns_payload(self):
        assert try_extract_json('{"a": 1}') == {"a": 1}

    def test_returns_none_on_failure(self):
        assert try_extract_json("no json") is None
        assert try_extract_json("[1, 2", expect=list) is None

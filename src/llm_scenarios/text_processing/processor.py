"""
Text summarization and categorization via prompting.

Four independent prompts run against the same input text. process() fans
them out concurrently and waits for all four; they share no data, so the
completion order does not matter.

Keyword and sentiment prompts ask for JSON. When the model replies with
something unparseable we fall back (keyword heuristic split, neutral
sentiment) instead of raising.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor

from pydantic import ValidationError

from llm_scenarios.core import ChatMessage, CompletionProvider, MalformedResponseError
from llm_scenarios.parsing import extract_json, try_extract_json
from llm_scenarios.text_processing.schemas import SentimentResult, TextAnalysis

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    "Technology",
    "Business",
    "Science",
    "Health",
    "Politics",
    "Entertainment",
    "Sports",
    "Other",
]

SYSTEM_PROMPT = "You are an expert text analyst. Follow the output format instructions exactly."

_SPLIT = re.compile(r"[,;\n]")
_LIST_MARKER = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")


def split_keywords(text: str, count: int) -> list[str]:
    """Heuristic keyword split for replies that are not a JSON array."""
    keywords: list[str] = []
    for part in _SPLIT.split(text):
        word = _LIST_MARKER.sub("", part).strip().strip("\"'`[]").strip()
        if word and word.lower() not in (k.lower() for k in keywords):
            keywords.append(word)
    return keywords[:count]


class TextProcessor:
    """Summarize, categorize, extract keywords and score sentiment."""

    def __init__(
        self,
        completion: CompletionProvider,
        max_output_tokens: int = 500,
        temperature: float = 0.3,
    ):
        self._completion = completion
        self.max_output_tokens = max_output_tokens
        self.temperature = temperature

    def _ask(self, prompt: str, temperature: float | None = None) -> str:
        messages = [
            ChatMessage(role="system", content=SYSTEM_PROMPT),
            ChatMessage(role="user", content=prompt),
        ]
        return self._completion.complete(
            messages,
            max_output_tokens=self.max_output_tokens,
            temperature=self.temperature if temperature is None else temperature,
        )

    def summarize(self, text: str, max_words: int = 100) -> str:
        prompt = f"""Summarize the following text in at most {max_words} words.

Text:
{text}"""
        return self._ask(prompt).strip()

    def categorize(self, text: str, categories: list[str] | None = None) -> str:
        """Pick one category; replies outside the list are kept as-is."""
        categories = categories or DEFAULT_CATEGORIES
        prompt = f"""Classify the following text into exactly one of these categories: {", ".join(categories)}.
Reply with the category name only.

Text:
{text}"""
        reply = self._ask(prompt, temperature=0.0).strip().strip(".\"'")
        for category in categories:
            if category.lower() == reply.lower():
                return category
        logger.debug(f"Category reply {reply!r} not in the allowed list")
        return reply

    def extract_keywords(self, text: str, count: int = 10) -> list[str]:
        prompt = f"""Extract the {count} most important keywords or key phrases from the following text.
Reply with a JSON array of strings only, for example ["keyword one", "keyword two"].

Text:
{text}"""
        reply = self._ask(prompt, temperature=0.0)
        try:
            payload = extract_json(reply, expect=list)
        except MalformedResponseError as e:
            logger.debug(f"Keyword reply not JSON ({e}); splitting heuristically")
            return split_keywords(reply, count)
        return [str(item).strip() for item in payload if str(item).strip()][:count]

    def analyze_sentiment(self, text: str) -> SentimentResult:
        prompt = f"""Analyze the sentiment of the following text.
Reply with a JSON object only:
{{"sentiment": "positive" | "negative" | "neutral" | "mixed", "confidence": <0-1>, "explanation": "<one sentence>"}}

Text:
{text}"""
        reply = self._ask(prompt, temperature=0.0)
        payload = try_extract_json(reply, expect=dict)
        if payload is None:
            logger.debug("Sentiment reply had no JSON object; using default")
            return SentimentResult.unknown()
        try:
            return SentimentResult.model_validate(payload)
        except ValidationError as e:
            logger.debug(f"Sentiment payload invalid: {e}")
            return SentimentResult.unknown()

    def process(self, text: str) -> TextAnalysis:
        """Run all four prompts concurrently and combine the results."""
        if not text or not text.strip():
            raise ValueError("text must be non-empty")

        with ThreadPoolExecutor(max_workers=4) as pool:
            summary = pool.submit(self.summarize, text)
            category = pool.submit(self.categorize, text)
            keywords = pool.submit(self.extract_keywords, text)
            sentiment = pool.submit(self.analyze_sentiment, text)

            return TextAnalysis(
                summary=summary.result(),
                category=category.result(),
                keywords=keywords.result(),
                sentiment=sentiment.result(),
            )

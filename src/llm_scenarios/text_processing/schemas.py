"""
Structured results for the text processing scenario.

SentimentResult is parsed from model output, so it is a Pydantic model:
an invalid label or an out-of-range confidence is a validation error and
triggers the neutral fallback instead of leaking bad data downstream.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, Field


class SentimentResult(BaseModel):
    """Overall sentiment of a text."""

    sentiment: Literal["positive", "negative", "neutral", "mixed"] = Field(
        description="Overall sentiment label"
    )
    confidence: float = Field(
        ge=0.0, le=1.0,
        description="Model confidence in the label, 0-1"
    )
    explanation: str = Field(
        default="",
        description="One-sentence justification"
    )

    @classmethod
    def unknown(cls) -> "SentimentResult":
        """Default used when the model output cannot be parsed."""
        return cls(sentiment="neutral", confidence=0.0, explanation="Sentiment could not be determined.")


@dataclass
class TextAnalysis:
    """Combined output of the four text processing prompts."""
    summary: str
    category: str
    keywords: list[str] = field(default_factory=list)
    sentiment: SentimentResult = field(default_factory=SentimentResult.unknown)

"""
Text processing module - summarization, categorization, keywords, sentiment.
"""

from llm_scenarios.text_processing.processor import (
    DEFAULT_CATEGORIES,
    TextProcessor,
    split_keywords,
)
from llm_scenarios.text_processing.schemas import SentimentResult, TextAnalysis

__all__ = [
    "DEFAULT_CATEGORIES",
    "TextProcessor",
    "split_keywords",
    "SentimentResult",
    "TextAnalysis",
]

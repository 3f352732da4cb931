"""
Data analytics via prompting.

The analyst sends a dataset description plus a question to the
completion service. Statistics are requested as JSON and validated with
Pydantic; a reply that cannot be parsed yields an empty DatasetStatistics
rather than an error.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field, ValidationError

from llm_scenarios.analytics.dataset import Row, describe_dataset
from llm_scenarios.core import ChatMessage, CompletionProvider
from llm_scenarios.parsing import try_extract_json

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a data analyst. You answer questions about a tabular dataset.
Base every statement on the dataset description provided. If the description
does not contain enough information to answer, say so."""


class ColumnStatistics(BaseModel):
    """Summary statistics for one numeric column."""

    column: str
    mean: float | None = None
    median: float | None = None
    min: float | None = None
    max: float | None = None


class DatasetStatistics(BaseModel):
    """Statistics the model computed for the dataset."""

    row_count: int | None = None
    columns: list[ColumnStatistics] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.row_count is None and not self.columns and not self.notes


class DataAnalyst:
    """Answers questions and produces insights about CSV data."""

    def __init__(
        self,
        completion: CompletionProvider,
        max_output_tokens: int = 1000,
        temperature: float = 0.2,
        sample_size: int = 5,
    ):
        self._completion = completion
        self.max_output_tokens = max_output_tokens
        self.temperature = temperature
        self.sample_size = sample_size

    def _ask(self, rows: list[Row], instruction: str) -> str:
        prompt = f"""Dataset description:
{describe_dataset(rows, sample_size=self.sample_size)}

{instruction}"""
        messages = [
            ChatMessage(role="system", content=SYSTEM_PROMPT),
            ChatMessage(role="user", content=prompt),
        ]
        return self._completion.complete(
            messages,
            max_output_tokens=self.max_output_tokens,
            temperature=self.temperature,
        )

    def ask(self, rows: list[Row], question: str) -> str:
        """Answer a free-form question about the data."""
        if not question or not question.strip():
            raise ValueError("question must be non-empty")
        return self._ask(rows, f"Question: {question}")

    def generate_insights(self, rows: list[Row]) -> str:
        """Key trends, outliers and recommendations, as prose."""
        return self._ask(
            rows,
            "Describe the three to five most important insights in this data: "
            "trends, outliers and a recommendation for each.",
        )

    def calculate_statistics(self, rows: list[Row]) -> DatasetStatistics:
        """Per-column statistics as computed by the model."""
        reply = self._ask(
            rows,
            """Calculate summary statistics for each numeric column.
Reply with a JSON object only, in this shape:
{"row_count": <int>, "columns": [{"column": "<name>", "mean": <n>, "median": <n>, "min": <n>, "max": <n>}], "notes": ["<observation>"]}""",
        )
        payload = try_extract_json(reply, expect=dict)
        if payload is None:
            logger.debug("Statistics reply had no JSON object; returning empty statistics")
            return DatasetStatistics()
        try:
            return DatasetStatistics.model_validate(payload)
        except ValidationError as e:
            logger.debug(f"Statistics payload invalid: {e}")
            return DatasetStatistics()

"""
CSV loading and dataset description for the analytics scenario.

The model never sees the whole file: describe_dataset() produces a
compact text summary (columns, row count, numeric ranges, sample rows)
that goes into the prompt.
"""

from __future__ import annotations

import csv
from pathlib import Path

Row = dict[str, str]


def load_csv(path: Path | str) -> list[Row]:
    """
    Read a CSV file with a header row into a list of dicts.

    Short rows are padded with empty strings; fields beyond the header are
    dropped.
    """
    with open(path, newline="", encoding="utf-8") as f:
        return [
            {key: value for key, value in row.items() if key is not None}
            for row in csv.DictReader(f, restval="")
        ]


def get_sample_sales_data() -> list[Row]:
    """Small built-in sales dataset used when no CSV is given."""
    rows = [
        ("2024-01-15", "Laptop", "Electronics", "North", "12", "1199.99"),
        ("2024-01-18", "Desk Chair", "Furniture", "South", "30", "249.50"),
        ("2024-02-02", "Monitor", "Electronics", "East", "25", "329.00"),
        ("2024-02-10", "Standing Desk", "Furniture", "West", "8", "599.00"),
        ("2024-02-21", "Headphones", "Electronics", "North", "40", "149.99"),
        ("2024-03-05", "Bookshelf", "Furniture", "East", "15", "189.00"),
        ("2024-03-12", "Laptop", "Electronics", "South", "18", "1199.99"),
        ("2024-03-28", "Desk Lamp", "Furniture", "West", "55", "39.99"),
        ("2024-04-03", "Keyboard", "Electronics", "North", "60", "89.00"),
        ("2024-04-19", "Monitor", "Electronics", "West", "22", "329.00"),
    ]
    columns = ["date", "product", "category", "region", "units_sold", "unit_price"]
    return [dict(zip(columns, row)) for row in rows]


def _as_float(value: str) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def numeric_columns(rows: list[Row]) -> list[str]:
    """Columns whose non-empty values all parse as numbers."""
    if not rows:
        return []
    result = []
    for column in rows[0]:
        values = [row[column] for row in rows if row.get(column) not in (None, "")]
        if values and all(_as_float(v) is not None for v in values):
            result.append(column)
    return result


def describe_dataset(rows: list[Row], sample_size: int = 5) -> str:
    """Text summary of the dataset for use inside a prompt."""
    if not rows:
        return "The dataset is empty."

    columns = list(rows[0])
    lines = [
        f"Rows: {len(rows)}",
        f"Columns: {', '.join(columns)}",
    ]

    numeric = numeric_columns(rows)
    if numeric:
        lines.append("Numeric column ranges:")
        for column in numeric:
            values = [_as_float(row[column]) for row in rows if row.get(column) not in (None, "")]
            lines.append(f"- {column}: min {min(values):g}, max {max(values):g}")

    lines.append(f"First {min(sample_size, len(rows))} rows:")
    lines.append(",".join(columns))
    for row in rows[:sample_size]:
        lines.append(",".join(str(row.get(column) or "") for column in columns))

    return "\n".join(lines)

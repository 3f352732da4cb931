"""
Analytics module - CSV-driven data analysis via prompting.
"""

from llm_scenarios.analytics.analyst import (
    ColumnStatistics,
    DataAnalyst,
    DatasetStatistics,
)
from llm_scenarios.analytics.dataset import (
    describe_dataset,
    get_sample_sales_data,
    load_csv,
    numeric_columns,
)

__all__ = [
    "ColumnStatistics",
    "DataAnalyst",
    "DatasetStatistics",
    "describe_dataset",
    "get_sample_sales_data",
    "load_csv",
    "numeric_columns",
]

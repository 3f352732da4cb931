"""
Seed data for the retrieval system.

Separating data from infrastructure keeps the sample knowledge base
replaceable without touching the index or orchestrator code.
"""

from llm_scenarios.retrieval.seeds.sample_documents import get_sample_documents

__all__ = ["get_sample_documents"]

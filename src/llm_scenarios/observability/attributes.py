"""
Span attribute keys.

GenAI keys follow the OpenTelemetry semantic conventions; the scenario and
rag namespaces are our own.
"""

GEN_AI_SYSTEM = "gen_ai.system"
GEN_AI_REQUEST_MODEL = "gen_ai.request.model"

SCENARIO_NAME = "scenario.name"  # "chat", "rag", "analytics", "text"
SCENARIO_MOCK = "scenario.mock"

RAG_TOP_K = "rag.top_k"
RAG_RETRIEVED_DOC_COUNT = "rag.retrieved_doc_count"
RAG_RETRIEVED_DOC_IDS = "rag.retrieved_doc_ids"
RAG_INGESTED_DOC_COUNT = "rag.ingested_doc_count"

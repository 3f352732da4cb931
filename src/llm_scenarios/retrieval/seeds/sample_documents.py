"""
Sample knowledge base for the RAG walkthrough.

Five short documents about Azure AI services. In production these would
come from a content pipeline; here they let the RAG scenario run end to end.
"""

from __future__ import annotations

from llm_scenarios.retrieval.document import Document


def get_sample_documents() -> list[Document]:
    """Fresh sample documents, without embeddings."""
    return [
        Document(
            id="doc-azure-openai",
            title="Azure OpenAI Service Overview",
            content=(
                "Azure OpenAI Service provides REST API access to OpenAI's language models, "
                "including the GPT-4o, GPT-4 and GPT-3.5-Turbo model series as well as the "
                "embeddings models. Models are deployed into an Azure resource and called "
                "through a deployment name, with the security, private networking and "
                "regional availability of Azure."
            ),
            category="AI Services",
            source="Azure Documentation",
        ),
        Document(
            id="doc-ai-search",
            title="Azure AI Search Vector Search",
            content=(
                "Azure AI Search supports vector search over embeddings stored in an index. "
                "Vector fields are declared with a dimension and a vector search profile that "
                "selects an approximate nearest neighbour algorithm such as HNSW and a "
                "similarity metric such as cosine. Hybrid queries combine keyword and vector "
                "retrieval."
            ),
            category="Search",
            source="Azure Documentation",
        ),
        Document(
            id="doc-rag-pattern",
            title="Retrieval-Augmented Generation",
            content=(
                "Retrieval-Augmented Generation (RAG) grounds a language model in your own "
                "data. The question is embedded, the most similar documents are retrieved "
                "from a vector index, and the retrieved text is passed to the model as "
                "context so answers can cite their sources instead of relying on training "
                "data alone."
            ),
            category="Architecture",
            source="Azure Architecture Center",
        ),
        Document(
            id="doc-embeddings",
            title="Understanding Embeddings",
            content=(
                "An embedding is a fixed-length vector of floating point numbers that "
                "represents the meaning of a piece of text. text-embedding-ada-002 and "
                "text-embedding-3-small produce 1536-dimensional vectors. Texts with similar "
                "meaning produce vectors with high cosine similarity."
            ),
            category="Concepts",
            source="OpenAI Documentation",
        ),
        Document(
            id="doc-responsible-ai",
            title="Responsible AI Content Filtering",
            content=(
                "Azure OpenAI Service includes a content filtering system that runs prompts "
                "and completions through classification models to detect and block harmful "
                "content across hate, sexual, violence and self-harm categories. Filter "
                "severity levels can be configured per deployment."
            ),
            category="Governance",
            source="Azure Documentation",
        ),
    ]

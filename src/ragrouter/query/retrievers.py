"""
Named content retrievers.

A retriever is paired with a display name (used in debug output) and a
description (read by the query router to decide where a question goes).
"""

from dataclasses import dataclass

from langchain_community.retrievers import TavilySearchAPIRetriever
from langchain_core.retrievers import BaseRetriever

from ..ingest.ingestor import IngestedDocument

WEB_RETRIEVER_NAME = "WebSearchRetriever(Tavily)"
WEB_RETRIEVER_DESCRIPTION = (
    "Current events, recent news, or general topics not covered by the PDF "
    "documents (such as weather, sports, etc.)"
)


@dataclass(frozen=True)
class NamedRetriever:
    name: str
    description: str
    retriever: BaseRetriever


def build_store_retriever(
    document: IngestedDocument, max_results: int = 2
) -> NamedRetriever:
    """Similarity retriever over the segments of one ingested document."""
    retriever = document.store.as_retriever(
        search_type="similarity", search_kwargs={"k": max_results}
    )
    return NamedRetriever(
        name=f"EmbeddingStoreRetriever({document.source.name})",
        description=document.source.description,
        retriever=retriever,
    )


def build_web_retriever(api_key: str, max_results: int = 3) -> NamedRetriever:
    """Tavily web search retriever for questions the documents cannot answer."""
    retriever = TavilySearchAPIRetriever(k=max_results, api_key=api_key)
    return NamedRetriever(
        name=WEB_RETRIEVER_NAME,
        description=WEB_RETRIEVER_DESCRIPTION,
        retriever=retriever,
    )

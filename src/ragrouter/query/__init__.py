"""
Query module for RagRouter.

This module contains the retrievers, the query routers, the retrieval
augmentor, the conversation memory and the LangGraph-based assistant that
orchestrates the whole question-answering pipeline.
"""

from .assistant import RagAssistant, RagResponse
from .augmentor import RetrievalAugmentor, RetrievalResult
from .memory import SqliteConversationMemory
from .retrievers import NamedRetriever
from .router import (
    DefaultQueryRouter,
    FallbackStrategy,
    LanguageModelQueryRouter,
    RouteDecision,
    RoutingError,
)

__all__ = [
    "RagAssistant",
    "RagResponse",
    "RetrievalAugmentor",
    "RetrievalResult",
    "SqliteConversationMemory",
    "NamedRetriever",
    "DefaultQueryRouter",
    "LanguageModelQueryRouter",
    "FallbackStrategy",
    "RouteDecision",
    "RoutingError",
]

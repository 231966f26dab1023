#!/usr/bin/env python3
"""
Query Routing

Decides which retrievers should answer a query. ``DefaultQueryRouter`` sends
every query to every retriever. ``LanguageModelQueryRouter`` shows the chat
model a numbered list of retriever descriptions and lets it pick one or more.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.prompts import ChatPromptTemplate

from .retrievers import NamedRetriever

logger = logging.getLogger(__name__)

ROUTER_PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "human",
            "Based on the user query, determine the most suitable data source(s) "
            "to retrieve relevant information from the following options:\n"
            "{options}\n"
            "It is very important that your answer consists of either a single "
            "number or multiple numbers separated by commas and nothing else!\n"
            "User query: {query}",
        )
    ]
)


class FallbackStrategy(str, Enum):
    """What to do when the model's routing answer cannot be used."""

    DO_NOT_ROUTE = "do_not_route"
    ROUTE_TO_ALL = "route_to_all"
    FAIL = "fail"


class RoutingError(RuntimeError):
    """Raised by the FAIL fallback strategy."""


@dataclass
class RouteDecision:
    query: str
    retrievers: List[NamedRetriever] = field(default_factory=list)
    # False when every retriever was used without asking the model
    routed: bool = True


class DefaultQueryRouter:
    """Routes every query to all retrievers."""

    def __init__(self, retrievers: Sequence[NamedRetriever]):
        self.retrievers = list(retrievers)

    def route(self, query: str) -> RouteDecision:
        return RouteDecision(
            query=query, retrievers=list(self.retrievers), routed=False
        )


class LanguageModelQueryRouter:
    """
    Lets the chat model choose the retrievers for each query.
    """

    def __init__(
        self,
        llm: BaseChatModel,
        retrievers: Sequence[NamedRetriever],
        fallback_strategy: FallbackStrategy = FallbackStrategy.DO_NOT_ROUTE,
    ):
        if not retrievers:
            raise ValueError("LanguageModelQueryRouter needs at least one retriever")
        self.llm = llm
        self.retrievers = list(retrievers)
        self.fallback_strategy = FallbackStrategy(fallback_strategy)

    def _format_options(self) -> str:
        return "\n".join(
            f"{index}: {retriever.description}"
            for index, retriever in enumerate(self.retrievers, 1)
        )

    def parse_selection(self, answer: str) -> List[NamedRetriever]:
        """
        Maps the model's comma-separated 1-based indices to retrievers.

        Raises:
            ValueError: If the answer is not a list of valid indices.
        """
        tokens = [token.strip() for token in answer.strip().split(",")]
        if not tokens or any(not token.isdigit() for token in tokens):
            raise ValueError(f"Router answer is not a list of numbers: '{answer}'")

        selected: List[NamedRetriever] = []
        for token in tokens:
            index = int(token)
            if not 1 <= index <= len(self.retrievers):
                raise ValueError(f"Router answer contains unknown option {index}")
            retriever = self.retrievers[index - 1]
            if retriever not in selected:
                selected.append(retriever)
        return selected

    def _fallback(self, query: str, error: Exception) -> RouteDecision:
        if self.fallback_strategy is FallbackStrategy.FAIL:
            raise RoutingError(f"Could not route query '{query}': {error}") from error
        if self.fallback_strategy is FallbackStrategy.ROUTE_TO_ALL:
            logger.warning(f"Routing failed ({error}). Routing to all retrievers.")
            return RouteDecision(query=query, retrievers=list(self.retrievers))
        logger.warning(f"Routing failed ({error}). Not routing.")
        return RouteDecision(query=query)

    def route(self, query: str) -> RouteDecision:
        messages = ROUTER_PROMPT.format_messages(
            options=self._format_options(), query=query
        )
        try:
            answer = self.llm.invoke(messages).content
            if not isinstance(answer, str):
                answer = str(answer)
            selected = self.parse_selection(answer)
        except Exception as e:
            return self._fallback(query, e)

        logger.info(
            f"Router selected {len(selected)} retriever(s): "
            f"{[retriever.name for retriever in selected]}"
        )
        return RouteDecision(query=query, retrievers=selected)

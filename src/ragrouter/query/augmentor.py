"""
Retrieval augmentation: route the query, collect content from the selected
retrievers and inject it into the user message.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Tuple, Union

from langchain_core.documents import Document

from .retrievers import NamedRetriever
from .router import DefaultQueryRouter, LanguageModelQueryRouter, RouteDecision

logger = logging.getLogger(__name__)

QueryRouter = Union[DefaultQueryRouter, LanguageModelQueryRouter]


@dataclass
class RetrievalResult:
    """The routing decision and what each selected retriever returned."""

    decision: RouteDecision
    contents: List[Tuple[NamedRetriever, List[Document]]] = field(
        default_factory=list
    )

    @property
    def documents(self) -> List[Document]:
        return [doc for _, docs in self.contents for doc in docs]


class RetrievalAugmentor:
    def __init__(self, router: QueryRouter):
        self.router = router

    def retrieve(self, query: str) -> RetrievalResult:
        decision = self.router.route(query)
        result = RetrievalResult(decision=decision)
        for named in decision.retrievers:
            try:
                docs = named.retriever.invoke(query)
            except Exception as e:
                logger.error(f"Retriever '{named.name}' failed: {e}", exc_info=True)
                docs = []
            logger.debug(f"Retriever '{named.name}' returned {len(docs)} segment(s)")
            result.contents.append((named, docs))
        return result

    @staticmethod
    def inject(user_message: str, result: RetrievalResult) -> str:
        """Appends the retrieved segments to the user message."""
        segments = [doc.page_content for doc in result.documents if doc.page_content]
        if not segments:
            return user_message
        return (
            f"{user_message}\n\nAnswer using the following information:\n"
            + "\n\n".join(segments)
        )

#!/usr/bin/env python3
"""
RAG Assistant using LangGraph.

This module wires the chat model, the embedding model, the ingested document
stores, the retrievers and the query router together, and runs each question
through a small LangGraph workflow:

    retrieve -> generate -> update_memory

The routing decision taken in ``retrieve`` is rendered for the debug panel, so
the caller sees exactly which retrievers contributed to the answer.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, TypedDict

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_huggingface import HuggingFaceEmbeddings
from langgraph.graph import END, StateGraph
from langgraph.pregel import Pregel

from ..ingest.ingestor import DocumentIngestor
from ..utils.config import RagRouterConfig
from .augmentor import RetrievalAugmentor, RetrievalResult
from .debug import format_router_debug
from .memory import SqliteConversationMemory
from .prompts import DEFAULT_ROLE, system_prompt
from .retrievers import build_store_retriever, build_web_retriever
from .router import DefaultQueryRouter, FallbackStrategy, LanguageModelQueryRouter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RagResponse:
    answer: str
    debug_info: str


class GraphState(TypedDict, total=False):
    """
    Represents the state of the question graph.

    Attributes:
        session_id: The unique ID for the conversation.
        user_query: The question as typed by the user.
        retrieval: What the router selected and the retrievers returned.
        response: The final answer from the assistant.
        debug_info: The rendered routing decision.
    """

    session_id: str
    user_query: str
    retrieval: Optional[RetrievalResult]
    response: str
    debug_info: str


def _message_text(message: BaseMessage) -> str:
    content = message.content
    if isinstance(content, str):
        return content
    # Multi-part responses: keep the text parts
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


def build_augmentor(
    config: RagRouterConfig, llm: BaseChatModel, ingestor: DocumentIngestor
) -> Optional[RetrievalAugmentor]:
    """Builds the retrieval pipeline matching the configured mode."""
    mode = config.mode
    if mode == "chat":
        logger.info("Chat mode: retrieval disabled.")
        return None

    sources = config.document_sources()
    if mode == "single":
        combined = ingestor.ingest_combined(sources)
        retrievers = [build_store_retriever(combined, config.max_results)]
        return RetrievalAugmentor(DefaultQueryRouter(retrievers))

    ingested = ingestor.ingest_all(sources)
    retrievers = [build_store_retriever(doc, config.max_results) for doc in ingested]
    if mode == "multi":
        return RetrievalAugmentor(DefaultQueryRouter(retrievers))

    retrievers.append(
        build_web_retriever(config.tavily_api_key, config.web_max_results)
    )
    router = LanguageModelQueryRouter(
        llm, retrievers, FallbackStrategy(config.router_fallback)
    )
    return RetrievalAugmentor(router)


class RagAssistant:
    """
    Answers questions with retrieval augmentation and per-session memory.
    """

    def __init__(
        self,
        llm: BaseChatModel,
        augmentor: Optional[RetrievalAugmentor],
        memory: SqliteConversationMemory,
        role: str = DEFAULT_ROLE,
    ):
        self.llm = llm
        self.augmentor = augmentor
        self.memory = memory
        self.system_prompt = system_prompt(role)
        self.graph: Pregel = self._build_graph()
        logger.info("RagAssistant with LangGraph workflow initialized.")

    @classmethod
    def from_config(cls, config: RagRouterConfig) -> "RagAssistant":
        """Creates the models and ingests the documents for the configured mode."""
        config.validate()

        logger.info(f"Initializing chat model '{config.model_name}'...")
        llm = ChatGoogleGenerativeAI(
            model=config.model_name,
            google_api_key=config.gemini_api_key,
            temperature=config.temperature,
        )

        augmentor = None
        if config.mode != "chat":
            logger.info(f"Loading embedding model '{config.embedding_model_name}'...")
            embedding_model = HuggingFaceEmbeddings(
                model_name=config.embedding_model_name
            )
            ingestor = DocumentIngestor(
                embedding_model,
                chunk_size=config.chunk_size,
                chunk_overlap=config.chunk_overlap,
            )
            augmentor = build_augmentor(config, llm, ingestor)

        memory = SqliteConversationMemory(
            db_path=config.memory_db_path,
            history_limit=config.history_limit,
        )
        return cls(llm=llm, augmentor=augmentor, memory=memory)

    def _build_messages(
        self, history: List[Dict], user_message: str
    ) -> List[BaseMessage]:
        messages: List[BaseMessage] = [SystemMessage(content=self.system_prompt)]
        for message in history:
            if message["role"] == "user":
                messages.append(HumanMessage(content=message["content"]))
            else:
                messages.append(AIMessage(content=message["content"]))
        messages.append(HumanMessage(content=user_message))
        return messages

    # --- Node Definitions for the Graph ---

    def retrieve_node(self, state: GraphState) -> Dict:
        """
        Node that routes the query and collects content from the chosen retrievers.
        """
        logger.info(f"Node: retrieve for session {state['session_id']}")
        if self.augmentor is None:
            return {"retrieval": None}
        return {"retrieval": self.augmentor.retrieve(state["user_query"])}

    def generate_node(self, state: GraphState) -> Dict:
        """
        Node that asks the chat model, with history and retrieved content.
        """
        logger.info(f"Node: generate for session {state['session_id']}")
        retrieval = state.get("retrieval")
        user_message = state["user_query"]
        if retrieval is not None:
            user_message = RetrievalAugmentor.inject(user_message, retrieval)

        history = self.memory.get_recent_messages(state["session_id"])
        response = self.llm.invoke(self._build_messages(history, user_message))
        return {
            "response": _message_text(response).strip(),
            "debug_info": format_router_debug(retrieval),
        }

    def update_memory(self, state: GraphState) -> Dict:
        """
        Node that saves the latest user query and assistant response to memory.
        """
        logger.info(f"Node: update_memory for session {state['session_id']}")
        self.memory.add_message(state["session_id"], "user", state["user_query"])
        self.memory.add_message(state["session_id"], "assistant", state["response"])
        return {}

    def _build_graph(self) -> Pregel:
        workflow = StateGraph(GraphState)

        workflow.add_node("retrieve", self.retrieve_node)
        workflow.add_node("generate", self.generate_node)
        workflow.add_node("update_memory", self.update_memory)

        workflow.set_entry_point("retrieve")
        workflow.add_edge("retrieve", "generate")
        workflow.add_edge("generate", "update_memory")
        workflow.add_edge("update_memory", END)

        return workflow.compile()

    def ask(self, prompt: str, session_id: str) -> RagResponse:
        """
        Answers one question and reports how it was routed.
        """
        initial_state = GraphState(
            session_id=session_id,
            user_query=prompt,
            retrieval=None,
            response="",
            debug_info="",
        )
        final_state = self.graph.invoke(initial_state)
        return RagResponse(
            answer=final_state.get("response", ""),
            debug_info=final_state.get("debug_info", ""),
        )

    def clear_session(self, session_id: str) -> None:
        self.memory.clear_session(session_id)

#!/usr/bin/env python3
"""
Configuration management for RagRouter.

This module provides centralized configuration management with support for
environment variables and .env files.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

ASSISTANT_MODES = ("chat", "single", "multi", "router")
ROUTER_FALLBACKS = ("do_not_route", "route_to_all", "fail")


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing or invalid."""


@dataclass(frozen=True)
class DocumentSource:
    """A document of the knowledge base and the description the router reads."""

    name: str
    path: Path
    description: str


# Documents shipped with the knowledge base, relative to the documents directory
DEFAULT_DOCUMENTS = [
    (
        "rag.pdf",
        "Information about RAG (Retrieval-Augmented Generation), LangChain "
        "and artificial intelligence",
    ),
    (
        "finance.pdf",
        "Information about finance, the economy, banks and investments",
    ),
]


class RagRouterConfig:
    """Centralized configuration for RagRouter."""

    def __init__(self, env_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            env_file: Path to .env file (optional)
        """
        if env_file:
            load_dotenv(env_file)
        else:
            # Try to load .env from project root
            project_root = Path(__file__).resolve().parent.parent.parent.parent
            env_path = project_root / ".env"
            if env_path.exists():
                load_dotenv(env_path)

    @staticmethod
    def _require(name: str, purpose: str) -> str:
        value = os.getenv(name)
        if value is None or not value.strip():
            raise ConfigurationError(
                f"Error: environment variable {name} is missing ({purpose})."
            )
        return value.strip()

    # API Keys
    @property
    def gemini_api_key(self) -> str:
        """Google AI Studio key for the Gemini chat model."""
        return self._require("GEMINI_KEY", "required for the Gemini chat model")

    @property
    def tavily_api_key(self) -> str:
        """Tavily key for the web search retriever."""
        return self._require("TAVILY_KEY", "required for web search")

    # Assistant Configuration
    @property
    def mode(self) -> str:
        """Assistant mode: chat, single, multi or router."""
        value = os.getenv("RAGROUTER_MODE", "router").strip().lower()
        if value not in ASSISTANT_MODES:
            raise ConfigurationError(
                f"Unknown RAGROUTER_MODE '{value}'. "
                f"Expected one of: {', '.join(ASSISTANT_MODES)}"
            )
        return value

    @property
    def router_fallback(self) -> str:
        """What the router does when the model answer cannot be used."""
        value = os.getenv("RAGROUTER_ROUTER_FALLBACK", "do_not_route").strip().lower()
        if value not in ROUTER_FALLBACKS:
            raise ConfigurationError(
                f"Unknown RAGROUTER_ROUTER_FALLBACK '{value}'. "
                f"Expected one of: {', '.join(ROUTER_FALLBACKS)}"
            )
        return value

    # Model Configuration
    @property
    def model_name(self) -> str:
        """Gemini model name for chat and routing."""
        return os.getenv("RAGROUTER_MODEL_NAME", "gemini-2.5-flash")

    @property
    def temperature(self) -> float:
        """Sampling temperature of the chat model."""
        return float(os.getenv("RAGROUTER_TEMPERATURE", "0.3"))

    @property
    def embedding_model_name(self) -> str:
        """Sentence-transformers model used for embeddings."""
        return os.getenv(
            "RAGROUTER_EMBEDDING_MODEL_NAME", "sentence-transformers/all-MiniLM-L6-v2"
        )

    # Data Configuration
    @property
    def documents_dir(self) -> str:
        """Directory holding the knowledge base documents."""
        return os.getenv("RAGROUTER_DOCUMENTS_DIR", "data/documents")

    @property
    def memory_db_path(self) -> str:
        """Path to SQLite conversation memory database."""
        return os.getenv("RAGROUTER_MEMORY_DB_PATH", "data/conversation_memory.db")

    # Processing Configuration
    @property
    def chunk_size(self) -> int:
        """Maximum segment size in characters."""
        return int(os.getenv("RAGROUTER_CHUNK_SIZE", "300"))

    @property
    def chunk_overlap(self) -> int:
        """Segment overlap in characters."""
        return int(os.getenv("RAGROUTER_CHUNK_OVERLAP", "30"))

    # Query Configuration
    @property
    def max_results(self) -> int:
        """Number of segments each document retriever returns."""
        return int(os.getenv("RAGROUTER_MAX_RESULTS", "2"))

    @property
    def web_max_results(self) -> int:
        """Number of results the web search retriever returns."""
        return int(os.getenv("RAGROUTER_WEB_MAX_RESULTS", "3"))

    @property
    def history_limit(self) -> int:
        """Number of messages kept in the conversation window."""
        return int(os.getenv("RAGROUTER_HISTORY_LIMIT", "10"))

    # Web Configuration
    @property
    def web_host(self) -> str:
        """Web interface host."""
        return os.getenv("RAGROUTER_WEB_HOST", "127.0.0.1")

    @property
    def web_port(self) -> int:
        """Web interface port."""
        return int(os.getenv("RAGROUTER_WEB_PORT", "7860"))

    @property
    def web_debug(self) -> bool:
        """Enable web debug mode."""
        return os.getenv("RAGROUTER_WEB_DEBUG", "false").lower() in (
            "true",
            "1",
            "yes",
            "on",
        )

    # Logging Configuration
    @property
    def log_level(self) -> str:
        """Logging level."""
        return os.getenv("RAGROUTER_LOG_LEVEL", "INFO")

    @property
    def log_requests(self) -> bool:
        """Log the requests and responses exchanged with the model."""
        return os.getenv("RAGROUTER_LOG_REQUESTS", "false").lower() in (
            "true",
            "1",
            "yes",
            "on",
        )

    def document_sources(self) -> List[DocumentSource]:
        """The documents the knowledge base is built from."""
        base = Path(self.documents_dir)
        return [
            DocumentSource(name=name, path=base / name, description=description)
            for name, description in DEFAULT_DOCUMENTS
        ]

    def validate(self) -> None:
        """Check that the keys the configured mode needs are present."""
        _ = self.gemini_api_key
        if self.mode == "router":
            _ = self.tavily_api_key

    def to_dict(self) -> dict:
        """Convert configuration to dictionary, with secrets masked."""
        return {
            "gemini_key": "***" if os.getenv("GEMINI_KEY") else None,
            "tavily_key": "***" if os.getenv("TAVILY_KEY") else None,
            "mode": self.mode,
            "router_fallback": self.router_fallback,
            "model_name": self.model_name,
            "temperature": self.temperature,
            "embedding_model_name": self.embedding_model_name,
            "documents_dir": self.documents_dir,
            "memory_db_path": self.memory_db_path,
            "chunk_size": self.chunk_size,
            "chunk_overlap": self.chunk_overlap,
            "max_results": self.max_results,
            "web_max_results": self.web_max_results,
            "history_limit": self.history_limit,
            "web_host": self.web_host,
            "web_port": self.web_port,
            "web_debug": self.web_debug,
            "log_level": self.log_level,
            "log_requests": self.log_requests,
        }

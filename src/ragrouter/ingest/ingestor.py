#!/usr/bin/env python3
"""
Document Ingestion

This module turns the knowledge base documents into searchable vector stores.
Each document is parsed, split into small overlapping segments, embedded and
stored in an in-memory Chroma collection. Documents can be ingested into one
store each (for routing) or into a single shared store.
"""

import logging
import re
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from langchain_community.document_loaders import PyPDFLoader, TextLoader
from langchain_community.vectorstores import Chroma
from langchain_community.vectorstores.utils import filter_complex_metadata
from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_text_splitters import RecursiveCharacterTextSplitter

from ..utils.config import DocumentSource

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = {".txt", ".md"}


@dataclass
class IngestedDocument:
    """A document source together with the store holding its segments."""

    source: DocumentSource
    store: Chroma
    segment_count: int


def _collection_name(name: str) -> str:
    # Chroma collection names: 3-63 chars, alphanumeric at both ends
    base = re.sub(r"[^a-zA-Z0-9_-]+", "-", name).strip("-_")[:40] or "docs"
    return f"{base}-{uuid.uuid4().hex[:8]}"


class DocumentIngestor:
    """
    Parses, splits, embeds and stores documents in in-memory vector stores.
    """

    def __init__(
        self,
        embedding_model: Embeddings,
        chunk_size: int = 300,
        chunk_overlap: int = 30,
    ):
        """
        Args:
            embedding_model: The embedding function used by the stores.
            chunk_size: Maximum segment size in characters.
            chunk_overlap: Characters shared by consecutive segments.
        """
        if chunk_overlap >= chunk_size:
            raise ValueError(
                f"chunk_overlap ({chunk_overlap}) must be smaller than "
                f"chunk_size ({chunk_size})"
            )
        self.embedding_model = embedding_model
        self.splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
        )

    def load(self, path: Path) -> List[Document]:
        """Parses a document file into LangChain documents."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Could not find document '{path}'")

        suffix = path.suffix.lower()
        if suffix == ".pdf":
            loader = PyPDFLoader(str(path))
        elif suffix in TEXT_SUFFIXES:
            loader = TextLoader(str(path), encoding="utf-8")
        else:
            raise ValueError(f"Unsupported document type '{suffix}' for '{path}'")

        documents = loader.load()
        logger.debug(f"Loaded {len(documents)} page(s) from '{path}'")
        return documents

    def split(self, documents: List[Document]) -> List[Document]:
        """Splits documents into overlapping segments."""
        return self.splitter.split_documents(documents)

    def _segments_for(self, source: DocumentSource) -> List[Document]:
        segments = self.split(self.load(source.path))
        for segment in segments:
            segment.metadata["source"] = str(source.path)
            segment.metadata["document"] = source.name
        return filter_complex_metadata(segments)

    def _new_store(self, name: str) -> Chroma:
        return Chroma(
            collection_name=_collection_name(name),
            embedding_function=self.embedding_model,
        )

    def ingest(self, source: DocumentSource) -> IngestedDocument:
        """Ingests one document into its own store."""
        segments = self._segments_for(source)
        store = self._new_store(source.name)
        if segments:
            store.add_documents(segments)
        else:
            logger.warning(f"No text could be extracted from '{source.name}'")

        logger.info(
            f"Ingestion of '{source.name}' finished. {len(segments)} segments."
        )
        return IngestedDocument(source=source, store=store, segment_count=len(segments))

    def ingest_all(self, sources: Iterable[DocumentSource]) -> List[IngestedDocument]:
        """Ingests every document into a separate store."""
        logger.info("Starting document ingestion (one store per document)...")
        ingested = [self.ingest(source) for source in sources]
        logger.info("Ingestion complete.")
        return ingested

    def ingest_combined(
        self, sources: Iterable[DocumentSource], name: str = "knowledge-base"
    ) -> IngestedDocument:
        """Ingests every document into one shared store."""
        sources = list(sources)
        logger.info(f"Starting document ingestion into shared store '{name}'...")
        store = self._new_store(name)
        total = 0
        for source in sources:
            segments = self._segments_for(source)
            if segments:
                store.add_documents(segments)
            total += len(segments)
            logger.info(
                f"Ingestion of '{source.name}' finished. {len(segments)} segments."
            )

        combined = DocumentSource(
            name=name,
            path=sources[0].path.parent if sources else Path("."),
            description="; ".join(source.description for source in sources),
        )
        logger.info(f"Ingestion complete. {total} segments in total.")
        return IngestedDocument(source=combined, store=store, segment_count=total)

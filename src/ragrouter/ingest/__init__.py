"""
Ingestion of the knowledge base documents into in-memory vector stores.
"""

from .ingestor import DocumentIngestor, IngestedDocument

__all__ = [
    "DocumentIngestor",
    "IngestedDocument",
]

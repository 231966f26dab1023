import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add the src directory to the path to ensure imports work from the root
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ragrouter.ingest.ingestor import DocumentIngestor
from ragrouter.utils.config import DocumentSource

PARAGRAPH = (
    "Retrieval-Augmented Generation grounds the answers of a language model "
    "in documents retrieved at question time. "
)


@pytest.fixture
def mock_chroma(mocker):
    """Replaces the Chroma store so no embedding or collection is created."""
    return mocker.patch("ragrouter.ingest.ingestor.Chroma")


@pytest.fixture
def ingestor():
    return DocumentIngestor(MagicMock(), chunk_size=300, chunk_overlap=30)


@pytest.fixture
def text_source(tmp_path):
    path = tmp_path / "rag.txt"
    path.write_text("\n\n".join(PARAGRAPH * 3 for _ in range(6)), encoding="utf-8")
    return DocumentSource(name="rag.txt", path=path, description="RAG notes")


def test_load_missing_file(ingestor, tmp_path):
    with pytest.raises(FileNotFoundError):
        ingestor.load(tmp_path / "missing.pdf")


def test_load_unsupported_type(ingestor, tmp_path):
    path = tmp_path / "slides.pptx"
    path.write_bytes(b"not really slides")

    with pytest.raises(ValueError, match="Unsupported"):
        ingestor.load(path)


def test_overlap_must_be_smaller_than_chunk():
    with pytest.raises(ValueError):
        DocumentIngestor(MagicMock(), chunk_size=100, chunk_overlap=100)


def test_split_respects_chunk_size(ingestor, text_source):
    segments = ingestor.split(ingestor.load(text_source.path))

    assert len(segments) > 1
    assert all(len(segment.page_content) <= 300 for segment in segments)


def test_ingest_stores_tagged_segments(mock_chroma, ingestor, text_source):
    ingested = ingestor.ingest(text_source)

    store = mock_chroma.return_value
    store.add_documents.assert_called_once()
    segments = store.add_documents.call_args[0][0]

    assert ingested.store is store
    assert ingested.segment_count == len(segments) > 1
    assert all(seg.metadata["document"] == "rag.txt" for seg in segments)
    assert all(seg.metadata["source"] == str(text_source.path) for seg in segments)

    kwargs = mock_chroma.call_args.kwargs
    assert kwargs["collection_name"].startswith("rag-txt-")
    assert kwargs["embedding_function"] is ingestor.embedding_model


def test_ingest_all_creates_one_store_per_document(
    mock_chroma, ingestor, text_source, tmp_path
):
    other_path = tmp_path / "finance.md"
    other_path.write_text("Bonds are debt securities. " * 40, encoding="utf-8")
    other = DocumentSource(name="finance.md", path=other_path, description="Finance")

    ingested = ingestor.ingest_all([text_source, other])

    assert [doc.source.name for doc in ingested] == ["rag.txt", "finance.md"]
    assert mock_chroma.call_count == 2


def test_ingest_combined_uses_one_store(mock_chroma, ingestor, text_source, tmp_path):
    other_path = tmp_path / "finance.md"
    other_path.write_text("Bonds are debt securities. " * 40, encoding="utf-8")
    other = DocumentSource(name="finance.md", path=other_path, description="Finance")

    combined = ingestor.ingest_combined([text_source, other])

    assert mock_chroma.call_count == 1
    assert mock_chroma.return_value.add_documents.call_count == 2
    assert combined.source.description == "RAG notes; Finance"
    assert combined.segment_count > 2

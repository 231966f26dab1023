import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

os.environ.setdefault("GRADIO_ANALYTICS_ENABLED", "False")

# Add the src directory to the path to ensure imports work from the root
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fastapi.testclient import TestClient

import ragrouter.web.app as app_module
from ragrouter.query.assistant import RagAssistant, RagResponse
from ragrouter.web.view import ChatView


@pytest.fixture
def mock_assistant(monkeypatch):
    """Installs a mocked assistant; the lifespan (document ingestion) never runs."""
    engine = MagicMock(spec=RagAssistant)
    engine.ask.return_value = RagResponse(
        answer="RAG stands for Retrieval-Augmented Generation.",
        debug_info="--- The router selected 1 retriever(s) ---",
    )
    monkeypatch.setattr(app_module, "assistant", engine)
    return engine


@pytest.fixture
def client():
    return TestClient(app_module.app)


def test_health_before_startup(client, monkeypatch):
    monkeypatch.setattr(app_module, "assistant", None)

    response = client.get("/health")

    assert response.status_code == 503


def test_health_ready(client, mock_assistant):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "engine": "ready"}


def test_chat_returns_answer_and_debug(client, mock_assistant):
    response = client.post(
        "/api/chat", json={"message": "  What is RAG?  ", "session_id": "s1"}
    )

    assert response.status_code == 200
    assert response.json() == {
        "response": "RAG stands for Retrieval-Augmented Generation.",
        "session_id": "s1",
        "debug_info": "--- The router selected 1 retriever(s) ---",
    }
    mock_assistant.ask.assert_called_once_with("What is RAG?", "s1")


def test_chat_generates_session_id(client, mock_assistant):
    response = client.post("/api/chat", json={"message": "Hello"})

    assert response.status_code == 200
    assert response.json()["session_id"]


def test_chat_rejects_blank_message(client, mock_assistant):
    response = client.post("/api/chat", json={"message": "   "})

    assert response.status_code == 400
    mock_assistant.ask.assert_not_called()


def test_chat_reports_assistant_error(client, mock_assistant):
    mock_assistant.ask.side_effect = ValueError("quota exceeded")

    response = client.post("/api/chat", json={"message": "Hello"})

    assert response.status_code == 500
    assert response.json()["detail"] == "ValueError: quota exceeded"


def test_clear_session(client, mock_assistant):
    response = client.post("/api/clear-session", json={"session_id": "s1"})

    assert response.status_code == 200
    mock_assistant.clear_session.assert_called_once_with("s1")


# --- Gradio handlers ---


def test_submit_message_appends_exchange(mocker):
    warning = mocker.patch.object(app_module.gr, "Warning")
    view = ChatView(ask=MagicMock(return_value=("An answer", "routing info")))

    question, history, transcript, debug, view = app_module.submit_message(
        "A question", [], view
    )

    assert question == ""
    assert history == [
        {"role": "user", "content": "A question"},
        {"role": "assistant", "content": "An answer"},
    ]
    assert transcript == "== User:\nA question\n== Assistant:\nAn answer\n\n"
    assert debug == "routing info"
    warning.assert_not_called()


def test_submit_blank_message_warns(mocker):
    warning = mocker.patch.object(app_module.gr, "Warning")
    view = ChatView(ask=MagicMock())

    _, history, _, _, _ = app_module.submit_message("", [], view)

    assert history == []
    warning.assert_called_once_with("Missing text: Please enter a question.")


def test_ask_backend_raises_on_http_error(mocker):
    response = MagicMock(status_code=500)
    response.json.return_value = {"detail": "ValueError: quota exceeded"}
    mocker.patch.object(app_module.requests, "post", return_value=response)

    with pytest.raises(app_module.BackendError, match="quota exceeded"):
        app_module.ask_backend("Hello", "s1")


def test_new_chat_clears_session_and_hides_debug(mocker):
    post = mocker.patch.object(app_module.requests, "post")
    update = mocker.patch.object(app_module.gr, "update", side_effect=dict)
    view = ChatView(ask=MagicMock(return_value=("A", "D")), debug=True)
    view.question = "Q"
    view.send()

    history, question, transcript, debug_box, fresh = app_module.new_chat(view)

    post.assert_called_once_with(
        f"{app_module.api_base_url}/api/clear-session",
        json={"session_id": view.session_id},
        timeout=10,
    )
    update.assert_called_once_with(value="", visible=False)
    assert debug_box == {"value": "", "visible": False}
    assert (history, question, transcript) == ([], "", "")
    assert fresh.session_id != view.session_id
    assert fresh.debug is False

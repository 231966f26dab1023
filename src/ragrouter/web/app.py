#!/usr/bin/env python3
"""
Web interface for RagRouter using FastAPI and Gradio.

This module provides a browser-based chat page powered by Gradio, with a
FastAPI backend that owns the assistant. The page shows the conversation
transcript and, when debug mode is on, which retrievers the router selected
and the segments they returned.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Dict, List, Optional, Tuple

import gradio as gr
import requests
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from ..query.assistant import RagAssistant
from ..utils.config import RagRouterConfig
from ..utils.logging import enable_request_logging
from .view import ChatView

logger = logging.getLogger(__name__)

# Global assistant - initialized once on startup
assistant: Optional[RagAssistant] = None


def _default_api_base_url() -> str:
    config = RagRouterConfig()
    return f"http://{config.web_host}:{config.web_port}"


api_base_url: str = _default_api_base_url()


# Pydantic models for API
class ChatRequest(BaseModel):
    """Request model for chat endpoint."""

    message: str
    session_id: Optional[str] = None


class ChatResponse(BaseModel):
    """Response model for chat endpoint."""

    response: str
    session_id: str
    debug_info: str


class ClearSessionRequest(BaseModel):
    """Request model for clearing session."""

    session_id: str


def init_assistant() -> RagAssistant:
    """
    Build the assistant on application startup. Documents are ingested here,
    so this runs only once when the FastAPI server starts.
    """
    config = RagRouterConfig()
    if config.log_requests:
        enable_request_logging()

    logger.info(f"Initializing RagRouter assistant (mode: {config.mode})...")
    try:
        engine = RagAssistant.from_config(config)
        logger.info("Assistant initialized successfully!")
        return engine
    except Exception as e:
        logger.error(f"Failed to initialize the assistant: {e}", exc_info=True)
        raise RuntimeError(f"Failed to initialize the assistant: {e}") from e


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI.
    Initializes the assistant on startup.
    """
    global assistant

    logger.info("Starting up FastAPI application...")
    try:
        assistant = init_assistant()
        yield
    finally:
        logger.info("Shutting down FastAPI application...")


app = FastAPI(
    title="RagRouter",
    description="Routed RAG chatbot over Gemini, local documents and web search",
    version="1.0.0",
    lifespan=lifespan,
)


def _require_assistant() -> RagAssistant:
    if assistant is None:
        raise HTTPException(status_code=503, detail="Assistant not initialized")
    return assistant


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    _require_assistant()
    return {"status": "healthy", "engine": "ready"}


@app.post("/api/chat", response_model=ChatResponse)
def chat_endpoint(request: ChatRequest):
    """
    Main chat endpoint: answers the message and reports the routing decision.
    """
    engine = _require_assistant()

    user_message = request.message.strip()
    if not user_message:
        raise HTTPException(status_code=400, detail="Please enter a question.")

    session_id = request.session_id or str(uuid.uuid4())
    logger.info(f"Processing message for session {session_id}: {user_message[:50]}...")

    try:
        result = engine.ask(user_message, session_id)
    except Exception as e:
        logger.error(f"Error processing chat message: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"{type(e).__name__}: {e}",
        )

    return ChatResponse(
        response=result.answer,
        session_id=session_id,
        debug_info=result.debug_info,
    )


@app.post("/api/clear-session")
def clear_session_endpoint(request: ClearSessionRequest):
    """
    Clear conversation memory for a specific session.
    """
    engine = _require_assistant()

    try:
        engine.clear_session(request.session_id)
    except Exception as e:
        logger.error(f"Error clearing session: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error clearing session: {e}")

    logger.info(f"Cleared session: {request.session_id}")
    return {"message": "Session cleared successfully", "session_id": request.session_id}


# ============================================================================
# Gradio Interface
# ============================================================================


class BackendError(RuntimeError):
    """The chat backend answered with an error."""


def ask_backend(question: str, session_id: str) -> Tuple[str, str]:
    """Sends one question to the FastAPI backend."""
    response = requests.post(
        f"{api_base_url}/api/chat",
        json={"message": question, "session_id": session_id},
        timeout=120,  # LLM routing, retrieval and generation
    )
    if response.status_code >= 400:
        try:
            detail = response.json().get("detail", response.text)
        except ValueError:
            detail = response.text
        raise BackendError(detail)

    data = response.json()
    return data["response"], data.get("debug_info", "")


def submit_message(
    question: str, history: List[Dict], view: Optional[ChatView]
) -> Tuple[str, List[Dict], str, str, ChatView]:
    """Handle message submission."""
    view = view or ChatView(ask=ask_backend)
    history = list(history or [])

    view.question = question
    shown = len(view.messages)
    transcript_before = view.conversation
    view.send()

    for message in view.messages[shown:]:
        gr.Warning(f"{message.summary}: {message.detail}")

    if view.conversation != transcript_before:
        history.append({"role": "user", "content": question})
        history.append({"role": "assistant", "content": view.answer})

    return "", history, view.conversation, view.debug_info, view


def toggle_debug(view: Optional[ChatView]):
    view = view or ChatView(ask=ask_backend)
    view.toggle_debug()
    return gr.update(visible=view.debug), view


def new_chat(view: Optional[ChatView]):
    """Clears the backend session and opens a fresh page."""
    if view is not None:
        try:
            requests.post(
                f"{api_base_url}/api/clear-session",
                json={"session_id": view.session_id},
                timeout=10,
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"Could not clear backend session: {e}")
        view = view.new_chat()
    else:
        view = ChatView(ask=ask_backend)

    logger.info(f"Started new session: {view.session_id}")
    return [], "", "", gr.update(value="", visible=view.debug), view


def create_gradio_interface() -> gr.Blocks:
    """
    Create and configure the Gradio chat interface.
    """
    with gr.Blocks(title="RagRouter") as demo:
        view_state = gr.State(value=None)

        gr.Markdown(
            """
            # RagRouter

            Ask about **RAG and AI**, **finance**, or anything current: the router
            decides whether to search the documents, the web, or both.
            """
        )

        gr.Dropdown(
            label="System role",
            choices=[(label, key) for key, label in ChatView.system_roles()],
            value=ChatView.system_roles()[0][0],
            interactive=False,
        )

        chatbot = gr.Chatbot(label="Chat", height=450, type="messages")

        with gr.Row():
            question_input = gr.Textbox(
                label="Question",
                placeholder="Type your question here...",
                lines=2,
                scale=4,
            )
            send_btn = gr.Button("Send", variant="primary", scale=1)

        with gr.Row():
            new_chat_btn = gr.Button("New chat", variant="secondary")
            debug_btn = gr.Button("Toggle debug", variant="secondary")

        conversation_box = gr.Textbox(
            label="Conversation", lines=8, interactive=False
        )
        debug_box = gr.Textbox(
            label="Routing debug", lines=12, interactive=False, visible=False
        )

        send_inputs = [question_input, chatbot, view_state]
        send_outputs = [question_input, chatbot, conversation_box, debug_box, view_state]
        send_btn.click(fn=submit_message, inputs=send_inputs, outputs=send_outputs)
        question_input.submit(fn=submit_message, inputs=send_inputs, outputs=send_outputs)

        debug_btn.click(
            fn=toggle_debug, inputs=[view_state], outputs=[debug_box, view_state]
        )
        new_chat_btn.click(
            fn=new_chat,
            inputs=[view_state],
            outputs=[chatbot, question_input, conversation_box, debug_box, view_state],
        )

    return demo


# Mount Gradio app to FastAPI
gradio_app = create_gradio_interface()
app = gr.mount_gradio_app(app, gradio_app, path="/")

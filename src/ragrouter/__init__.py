"""
RagRouter - A routed RAG chatbot over Gemini, local embeddings and web search.

This package wires a Gemini chat model, a MiniLM embedding model, in-memory
Chroma vector stores and a Tavily web retriever behind an LLM query router,
with a terminal and a browser-based chat front end.
"""

__version__ = "1.0.0"
__author__ = "RagRouter Team"

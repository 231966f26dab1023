"""
SQLite-backed conversation window, one history per chat session.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Dict, List

logger = logging.getLogger(__name__)


class SqliteConversationMemory:
    """
    SQLite-based conversation memory keeping the last messages of each session.
    """

    def __init__(
        self,
        db_path: str = "./data/conversation_memory.db",
        history_limit: int = 10,
    ):
        self.db_path = db_path
        self.history_limit = history_limit
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_database()
        logger.info(f"Connected to SQLite memory database at {db_path}")

    def _init_database(self) -> None:
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                CREATE TABLE IF NOT EXISTS conversations (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    session_id TEXT NOT NULL,
                    role TEXT NOT NULL,
                    content TEXT NOT NULL,
                    timestamp DATETIME DEFAULT CURRENT_TIMESTAMP
                )
                """
            )
            cursor.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_session_id
                ON conversations(session_id, id)
                """
            )
            conn.commit()

    def add_message(self, session_id: str, role: str, content: str) -> None:
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO conversations (session_id, role, content) VALUES (?, ?, ?)",
                (session_id, role, content),
            )
            conn.commit()

    def get_recent_messages(self, session_id: str) -> List[Dict]:
        # Rowid order, timestamps only have second resolution
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT role, content FROM conversations WHERE session_id = ?
                ORDER BY id DESC LIMIT ?
                """,
                (session_id, self.history_limit),
            )
            rows = cursor.fetchall()
            return [
                {"role": role, "content": content} for role, content in reversed(rows)
            ]

    def clear_session(self, session_id: str) -> None:
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM conversations WHERE session_id = ?", (session_id,)
            )
            conn.commit()
        logger.info(f"Cleared memory for session: {session_id}")

"""
State of one chat page: question, answer, transcript, debug panel and the
error messages shown to the user.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from ..query.prompts import DEFAULT_ROLE, SYSTEM_ROLES

logger = logging.getLogger(__name__)

# (question, session_id) -> (answer, debug_info)
AskFunction = Callable[[str, str], Tuple[str, str]]


@dataclass
class ViewMessage:
    severity: str
    summary: str
    detail: str


@dataclass
class ChatView:
    """
    One chat page. A new page means a new session and an empty transcript.
    """

    ask: AskFunction
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    role: str = DEFAULT_ROLE
    role_changeable: bool = False
    question: Optional[str] = None
    answer: Optional[str] = None
    debug: bool = False
    debug_info: str = ""
    conversation: str = ""
    messages: List[ViewMessage] = field(default_factory=list)

    def send(self) -> None:
        """Asks the assistant the current question and records the exchange."""
        if self.question is None or not self.question.strip():
            self._add_message("error", "Missing text", "Please enter a question.")
            return

        try:
            self.answer, self.debug_info = self.ask(self.question, self.session_id)
            self._record_exchange(self.question, self.answer)
        except Exception as e:
            logger.error(f"Error while asking the assistant: {e}", exc_info=True)
            self.answer = None
            self.debug_info = f"Error during execution: {e}"
            self._add_message("error", type(e).__name__, str(e))

    def toggle_debug(self) -> None:
        self.debug = not self.debug

    def new_chat(self) -> "ChatView":
        """Starts over with a fresh page and session."""
        return ChatView(ask=self.ask)

    @staticmethod
    def system_roles() -> List[Tuple[str, str]]:
        return [(key, label) for key, (label, _) in SYSTEM_ROLES.items()]

    def _record_exchange(self, question: str, answer: str) -> None:
        self.conversation += f"== User:\n{question}\n== Assistant:\n{answer}\n\n"

    def _add_message(self, severity: str, summary: str, detail: str) -> None:
        self.messages.append(ViewMessage(severity, summary, detail))

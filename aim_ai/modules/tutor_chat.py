# aim_ai/modules/tutor_chat.py
from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from aim_ai.engines.gemini_engine import APOLOGY_TEXT
from aim_ai.models import ChatMessage, TutorReply

logger = logging.getLogger(__name__)

FIRST_GREETING = "Hi! I'm Aim AI. I can help you understand \"{label}\". Ask me anything!"
CONTEXT_GREETING = "Hi! I'm Aim AI. I see you're studying \"{label}\". How can I help?"


class TutorEngine(Protocol):
    def ask(self, history: Sequence[ChatMessage], context_label: str, message: str) -> TutorReply: ...


class TutorConversation:
    """
    In-memory chat for one context label (usually the active module title).

    Changing the context wipes the history and starts over with a single
    greeting, so answers about one module never bleed into the next.
    """

    def __init__(self, engine: TutorEngine, context_label: str):
        self.engine = engine
        self.context_label = context_label
        self.messages: list[ChatMessage] = [
            ChatMessage(role="model", text=FIRST_GREETING.format(label=context_label))
        ]
        self.pending = False
        # message id -> (history, context label) as they were when the user sent it
        self._requests: dict[str, tuple[list[ChatMessage], str]] = {}

    def set_context(self, context_label: str) -> bool:
        """Switch context. Returns False (and keeps history) if unchanged."""
        if context_label == self.context_label:
            return False
        self.context_label = context_label
        self.messages = [
            ChatMessage(role="model", text=CONTEXT_GREETING.format(label=context_label))
        ]
        return True

    def begin(self, text: str) -> Optional[ChatMessage]:
        """
        Append the user's message and mark a reply as pending.
        None for blank input or while another reply is outstanding.
        """
        if not text or not text.strip() or self.pending:
            return None
        msg = ChatMessage(role="user", text=text)
        self._requests[msg.id] = (list(self.messages), self.context_label)
        self.messages.append(msg)
        self.pending = True
        return msg

    def complete(self, user_msg: ChatMessage) -> ChatMessage:
        """
        Ask the engine about `user_msg`, with the history and context label
        captured when begin() accepted it.
        """
        history, context = self._requests.pop(user_msg.id, (list(self.messages), self.context_label))
        try:
            reply = self.engine.ask(history, context, user_msg.text)
        except Exception:
            logger.exception("Tutor engine failed")
            reply = TutorReply(text=APOLOGY_TEXT)
        finally:
            self.pending = False

        ai_msg = ChatMessage(role="model", text=reply.text, grounding_links=reply.grounding_links)
        self.messages.append(ai_msg)
        return ai_msg

    def send(self, text: str) -> Optional[ChatMessage]:
        """begin() + complete() in one blocking call."""
        user_msg = self.begin(text)
        if user_msg is None:
            return None
        return self.complete(user_msg)

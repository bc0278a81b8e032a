"""
Chat Session - conversation state for the assistant page.

Keeps the ordered turn history and forwards each new message, with that
history, to the conversational AI client.
"""

from typing import List, Optional
import logging

from loaders.gemini import ChatReply, ChatTurn, GeminiClient, get_gemini_client

log = logging.getLogger(__name__)

USER = "user"
MODEL = "model"

WELCOME_MESSAGE = (
    "Hello! I'm the GidroAtlas assistant. Ask me about water objects, "
    "monitoring data or how to use the system."
)


class ChatSession:
    """
    A single conversation.

    On success both the user turn and the model reply are appended to the
    history. On failure only the user turn is kept and the error is
    returned.
    """

    def __init__(self, client: Optional[GeminiClient] = None):
        self.client = client or get_gemini_client()
        self.history: List[ChatTurn] = []

    def send(self, message: str) -> ChatReply:
        """Send a user message and record the exchange."""
        text = message.strip()
        if not text:
            return ChatReply(error="Message is empty")

        reply = self.client.send_message(text, history=list(self.history))
        self.history.append(ChatTurn(role=USER, content=text))

        if reply.ok:
            self.history.append(ChatTurn(role=MODEL, content=reply.reply))
        else:
            log.warning(f"Chat request failed: {reply.error}")
        return reply

    def reset(self):
        self.history = []

    @property
    def turns(self) -> int:
        return len(self.history)

"""
Gemini client - Conversational AI endpoint for the chat page.

Sends the user message together with the prior turns to Google's
``generateContent`` REST endpoint. Failures never raise: they come back as
an error string on the reply.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from core.config import get_settings

log = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are a helpful assistant for GidroAtlas, a water resources monitoring "
    "system for Kazakhstan. You help users with questions about water objects, "
    "monitoring data, and system features. Answer in Russian if the user writes "
    "in Russian, otherwise in English. Be concise and friendly in your responses."
)


@dataclass
class ChatTurn:
    """One turn of conversation history. ``role`` is "user" or "model"."""
    role: str
    content: str


@dataclass
class ChatReply:
    reply: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def build_contents(message: str, history: Sequence[ChatTurn]) -> List[Dict]:
    """Request ``contents``: prior turns in order, then the new user message."""
    contents = [{"role": turn.role, "parts": [{"text": turn.content}]} for turn in history]
    contents.append({"role": "user", "parts": [{"text": message}]})
    return contents


class GeminiClient:
    """
    Minimal Gemini REST client.

    Usage:
        client = GeminiClient(api_key="...")
        reply = client.send_message("Which lakes need inspection?", history=[])
        if reply.ok: print(reply.reply)
    """

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

    def __init__(self, api_key: str = None, model: str = "gemini-2.5-flash", timeout: float = 30.0):
        self.api_key = api_key or ""
        self.model = model
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    @property
    def url(self) -> str:
        return f"{self.BASE_URL}/{self.model}:generateContent"

    @retry(
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True,
    )
    def _post(self, payload: Dict):
        return self.session.post(self.url, params={"key": self.api_key}, json=payload, timeout=self.timeout)

    def send_message(self, message: str, history: Sequence[ChatTurn] = ()) -> ChatReply:
        """
        Send a message with its conversation history.

        Args:
            message: The new user message
            history: Earlier turns, oldest first

        Returns:
            ChatReply with the reply text, or with ``error`` set
        """
        if not self.api_key:
            return ChatReply(error="Gemini API key not configured")

        payload = {
            "contents": build_contents(message, history),
            "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
        }

        try:
            response = self._post(payload)
        except requests.RequestException as e:
            log.error(f"Gemini request failed: {e}")
            return ChatReply(error=str(e) or "Failed to get response from Gemini")

        if not response.ok:
            return ChatReply(error=self._error_message(response))

        try:
            data = response.json()
        except ValueError:
            return ChatReply(error="Invalid response from Gemini")

        candidates = data.get("candidates") or []
        if not candidates:
            return ChatReply(error="No response from Gemini")

        try:
            text = candidates[0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return ChatReply(error="No response from Gemini")

        log.info(f"Gemini replied with {len(text)} characters")
        return ChatReply(reply=text)

    @staticmethod
    def _error_message(response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            error = body["error"]
            if isinstance(error, dict):
                return error.get("message") or f"API error: {response.status_code}"
            return str(error)
        return f"API error: {response.status_code}"


# Singleton instance
_client: Optional[GeminiClient] = None


def get_gemini_client() -> GeminiClient:
    """Get the singleton client configured from settings."""
    global _client
    if _client is None:
        settings = get_settings()
        _client = GeminiClient(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            timeout=max(settings.request_timeout, 30.0),
        )
    return _client

"""OpenAI-compatible chat-completion client with per-chat turn history.

Turns are kept per chat_id for the lifetime of the client instance only.
A new client is created for every webhook event, so nothing is shared
between events; the backend session is addressed by chat_id alone.
"""

import logging
from typing import Any, Dict, List

import requests
from pydantic import BaseModel

LOG = logging.getLogger("prreview.llm.client")

# Same heuristic as the review budget: about 2 characters per token.
CHARS_PER_TOKEN = 2


class LLMError(Exception):
    """Raised when the model backend call fails or returns no choice."""

    pass


class ChatOptions(BaseModel):
    """Per-request options for chat_completion."""

    model: str | None = None
    token_limit: int = 0
    restart: bool = False
    system_prompt: str | None = None


class ChatResponse(BaseModel):
    """Model answer for one chat turn."""

    choice: str


def _estimate_tokens(messages: List[Dict[str, str]]) -> int:
    return sum(len(m["content"]) for m in messages) // CHARS_PER_TOKEN


class LLMClient:
    """Chat-completion client for an OpenAI-compatible endpoint."""

    def __init__(self, api_endpoint: str, api_key: str | None = None, timeout: int = 300) -> None:
        self._url = f"{api_endpoint.rstrip('/')}/chat/completions"
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers["Content-Type"] = "application/json"
        if api_key:
            self._session.headers["Authorization"] = f"Bearer {api_key}"
        self._history: Dict[str, List[Dict[str, str]]] = {}

    def _build_messages(self, chat_id: str, prompt: str, options: ChatOptions) -> List[Dict[str, str]]:
        """System prompt, prior turns (oldest dropped first to fit token_limit), then prompt."""
        head: List[Dict[str, str]] = []
        if options.system_prompt:
            head.append({"role": "system", "content": options.system_prompt})
        question = [{"role": "user", "content": prompt}]
        history = list(self._history.get(chat_id, []))
        if options.token_limit > 0:
            # drop whole user/assistant pairs
            while history and _estimate_tokens(head + history + question) > options.token_limit:
                history = history[2:]
        return head + history + question

    def chat_completion(self, chat_id: str, prompt: str, options: ChatOptions) -> ChatResponse:
        """Send one user turn for chat_id and return the model's answer.

        restart=True discards any earlier turns for this chat_id first, so
        the request is an independent single-turn exchange.

        Raises:
            LLMError: On network/HTTP failure or a response without a choice.
        """
        if options.restart:
            self._history.pop(chat_id, None)

        payload: Dict[str, Any] = {
            "messages": self._build_messages(chat_id, prompt, options),
            "user": chat_id,
        }
        if options.model:
            payload["model"] = options.model

        LOG.debug("Chat %s: sending %s message(s)", chat_id, len(payload["messages"]))
        try:
            resp = self._session.post(self._url, json=payload, timeout=self._timeout)
        except requests.RequestException as e:
            raise LLMError(f"request failed: {e}") from e
        if resp.status_code >= 400:
            raise LLMError(f"{resp.status_code}: {resp.text or resp.reason}")

        try:
            data = resp.json()
            choice = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise LLMError(f"unexpected response: {e}") from e
        if choice is None:
            raise LLMError("empty choice in response")

        turns = self._history.setdefault(chat_id, [])
        turns.append({"role": "user", "content": prompt})
        turns.append({"role": "assistant", "content": choice})
        return ChatResponse(choice=choice)

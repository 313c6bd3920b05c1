"""Local / on-device model provider.

Talks to an OpenAI-compatible server on this machine (Ollama, LM Studio,
llama.cpp server). Before every attempt the server is probed so an absent
capability fails fast with a clear cause instead of a connection timeout.
"""

import asyncio
import logging
from typing import Any

import httpx
from langchain_core.language_models import BaseChatModel

from chatdeck.core.config import DEFAULT_LOCAL_BASE_URL
from chatdeck.model import Message
from chatdeck.providers.base import Provider, ProviderError, extract_text, to_chat_messages

logger = logging.getLogger(__name__)

PROBE_TIMEOUT_SECONDS = 3.0


class LocalChatProvider(Provider):
    """Provider for a model served locally."""

    kind = "local"

    def __init__(
        self,
        model: str,
        base_url: str = DEFAULT_LOCAL_BASE_URL,
        api_key: str | None = None,
        temperature: float | None = None,
        timeout_seconds: float = 60.0,
        include_history: bool = False,
        label: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        chat_model: BaseChatModel | None = None,
    ):
        """Initialize the provider.

        Args:
            model: Model name as known to the local server.
            base_url: OpenAI-compatible API root (ends in /v1).
            api_key: Optional key; most local servers ignore it.
            temperature: Model temperature, server default when None.
            timeout_seconds: Wall-clock limit for a single request.
            include_history: Send prior turns as context. Off by default
                since small on-device models have short context windows.
            label: Footer identifier, defaults to "On-Device (<model>)".
            transport: httpx transport override for the availability probe.
            chat_model: Pre-built model, skips lazy creation.
        """
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.temperature = temperature
        self.timeout_seconds = timeout_seconds
        self.include_history = include_history
        self.label = label
        self._transport = transport
        self._model = chat_model

    def identify(self) -> str:
        return self.label or f"On-Device ({self.model})"

    async def probe(self) -> str | None:
        """Check the local server is up and serves the configured model."""
        url = f"{self.base_url}/models"
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}

        async with httpx.AsyncClient(timeout=PROBE_TIMEOUT_SECONDS, transport=self._transport) as client:
            try:
                response = await client.get(url, headers=headers)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                return f"Local model server at {self.base_url} answered HTTP {e.response.status_code}"
            except httpx.RequestError as e:
                return f"Local model server not reachable at {self.base_url}: {e.__class__.__name__}"

        try:
            data = response.json()
        except ValueError:
            return f"Local model server at {self.base_url} returned a non-JSON model list"

        served = _served_model_ids(data)
        # Servers that do not list models are trusted to load on demand
        if served and not any(_same_model(self.model, served_id) for served_id in served):
            return f"Model '{self.model}' is not available on the local server (found: {', '.join(served)})"
        return None

    def _create_model(self) -> BaseChatModel:
        from langchain_openai import ChatOpenAI

        kwargs: dict[str, Any] = {
            "model": self.model,
            "base_url": self.base_url,
            # Required by the client, ignored by local servers
            "api_key": self.api_key or "local",
        }
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature

        logger.info(f"Creating local ChatOpenAI: model={self.model}, base_url={self.base_url}")
        return ChatOpenAI(**kwargs)

    def _get_model(self) -> BaseChatModel:
        if self._model is None:
            self._model = self._create_model()
        return self._model

    async def generate(self, history: list[Message], new_text: str) -> str:
        """Prompt the local model.

        The failover loop probes before calling this; direct callers should
        check ``available()`` first.
        """
        context = history if self.include_history else []
        messages = to_chat_messages(context, new_text)
        model = self._get_model()

        try:
            response = await asyncio.wait_for(model.ainvoke(messages), timeout=self.timeout_seconds)
        except TimeoutError as e:
            raise ProviderError(f"Local model {self.model} timed out after {self.timeout_seconds}s") from e

        text = extract_text(response.content).strip()
        if not text:
            raise ProviderError(f"Local model {self.model} returned an empty response")
        return text


def _served_model_ids(data: Any) -> list[str]:
    if not isinstance(data, dict):
        return []
    entries = data.get("data") or data.get("models") or []
    ids = []
    for entry in entries:
        if isinstance(entry, dict):
            model_id = entry.get("id") or entry.get("name") or entry.get("model")
            if model_id:
                ids.append(str(model_id))
    return ids


def _same_model(wanted: str, served: str) -> bool:
    # Ollama lists "gemma3:latest" for a model requested as "gemma3"
    if wanted == served:
        return True
    return ":" not in wanted and served == f"{wanted}:latest"

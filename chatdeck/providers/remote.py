"""Remote model provider backed by a LangChain chat model."""

import asyncio
import logging
from typing import Any

from langchain.chat_models import init_chat_model
from langchain_core.language_models import BaseChatModel

from chatdeck.model import Message
from chatdeck.providers.base import Provider, ProviderError, extract_text, to_chat_messages

logger = logging.getLogger(__name__)


class RemoteChatProvider(Provider):
    """Calls a hosted model through ``init_chat_model``.

    The model is created on first use and cached. Creation errors (missing
    provider package, missing credentials) surface from ``generate`` like any
    other failure so the chain moves on.

    Example:
        >>> provider = RemoteChatProvider("google_genai:gemini-2.0-flash")
        >>> await provider.generate([], "Hello")
    """

    kind = "remote"

    def __init__(
        self,
        model_id: str,
        api_key: str | None = None,
        temperature: float | None = None,
        timeout_seconds: float = 60.0,
        label: str | None = None,
        extra_model_kwargs: dict[str, Any] | None = None,
        chat_model: BaseChatModel | None = None,
    ):
        """Initialize the provider.

        Args:
            model_id: Model identifier (provider:model format).
            api_key: API key for the model provider. When None the provider
                package reads its own environment variable.
            temperature: Model temperature, provider default when None.
            timeout_seconds: Wall-clock limit for a single request.
            label: Footer identifier, defaults to the model name.
            extra_model_kwargs: Additional kwargs passed to init_chat_model
                (e.g., base_url for OpenAI-compatible APIs).
            chat_model: Pre-built model, skips lazy creation.
        """
        self.model_id = model_id
        self.api_key = api_key
        self.temperature = temperature
        self.timeout_seconds = timeout_seconds
        self.label = label
        self.extra_model_kwargs = extra_model_kwargs or {}
        self._model = chat_model

    def identify(self) -> str:
        if self.label:
            return self.label
        # "google_genai:gemini-2.0-flash" -> "gemini-2.0-flash"
        return self.model_id.split(":", 1)[-1]

    def _create_model(self) -> BaseChatModel:
        kwargs: dict[str, Any] = {}
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature
        if self.api_key:
            kwargs["api_key"] = self.api_key
        kwargs.update(self.extra_model_kwargs)

        logger.info(f"Creating chat model: {self.model_id}, kwargs={list(kwargs.keys())}")
        return init_chat_model(self.model_id, **kwargs)

    def _get_model(self) -> BaseChatModel:
        if self._model is None:
            self._model = self._create_model()
        return self._model

    async def generate(self, history: list[Message], new_text: str) -> str:
        model = self._get_model()
        messages = to_chat_messages(history, new_text)

        try:
            response = await asyncio.wait_for(model.ainvoke(messages), timeout=self.timeout_seconds)
        except TimeoutError as e:
            raise ProviderError(f"{self.model_id} timed out after {self.timeout_seconds}s") from e

        text = extract_text(response.content).strip()
        if not text:
            raise ProviderError(f"{self.model_id} returned an empty response")
        return text

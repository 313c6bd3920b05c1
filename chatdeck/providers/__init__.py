"""Backend providers and the provider chain factory."""

from chatdeck.providers.base import (
    Provider,
    ProviderError,
    ProviderUnavailableError,
    extract_text,
    to_chat_messages,
)
from chatdeck.providers.factory import build_provider_chain, create_provider
from chatdeck.providers.local import LocalChatProvider
from chatdeck.providers.remote import RemoteChatProvider

__all__ = [
    "LocalChatProvider",
    "Provider",
    "ProviderError",
    "ProviderUnavailableError",
    "RemoteChatProvider",
    "build_provider_chain",
    "create_provider",
    "extract_text",
    "to_chat_messages",
]

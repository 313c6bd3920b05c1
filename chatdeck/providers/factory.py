"""Build the ordered provider chain from configuration."""

import logging

from chatdeck.core.config import DEFAULT_LOCAL_BASE_URL, ProviderConfig
from chatdeck.providers.base import Provider
from chatdeck.providers.local import LocalChatProvider
from chatdeck.providers.remote import RemoteChatProvider

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_MODEL = "gemma3"


def create_provider(config: ProviderConfig) -> Provider:
    """Instantiate one provider from its config entry."""
    if config.kind == "local":
        return LocalChatProvider(
            model=config.model or DEFAULT_LOCAL_MODEL,
            base_url=config.base_url or DEFAULT_LOCAL_BASE_URL,
            api_key=config.api_key,
            temperature=config.temperature,
            timeout_seconds=config.timeout_seconds,
            include_history=config.include_history,
            label=config.label,
        )

    # Unknown keys on the entry (base_url, max_tokens, ...) go to the model constructor
    extra = dict(config.model_extra or {})
    if config.base_url:
        extra["base_url"] = config.base_url
    return RemoteChatProvider(
        model_id=config.model or "",
        api_key=config.api_key,
        temperature=config.temperature,
        timeout_seconds=config.timeout_seconds,
        label=config.label,
        extra_model_kwargs=extra,
    )


def build_provider_chain(configs: list[ProviderConfig]) -> list[Provider]:
    """Create providers in configured order.

    Args:
        configs: Provider entries; order is failover order.

    Returns:
        Providers, one per entry.
    """
    chain = [create_provider(c) for c in configs]
    logger.info(f"Provider chain: {[p.identify() for p in chain]}")
    return chain

"""Ordered failover across the provider chain.

Strictly sequential, first success wins, one attempt per provider, no
backoff. Provider exceptions never escape: each attempt is turned into a
tagged ``ProviderSuccess`` or ``ProviderFailure``.
"""

import logging

from chatdeck.model import (
    Exhausted,
    Message,
    Outcome,
    ProviderAttempt,
    ProviderFailure,
    ProviderSuccess,
)
from chatdeck.providers import Provider, ProviderError, ProviderUnavailableError

logger = logging.getLogger(__name__)

NO_PROVIDERS_CAUSE = "No providers are configured"


def _describe(error: Exception) -> str:
    message = str(error).strip()
    return message or error.__class__.__name__


class FailoverLoop:
    """Runs one conversation turn against an ordered list of providers."""

    def __init__(self, providers: list[Provider]):
        self.providers = list(providers)

    async def attempt(self, provider: Provider, history: list[Message], new_text: str) -> ProviderAttempt:
        """Try a single provider.

        Args:
            provider: Provider to call.
            history: Prior turns, not including new_text.
            new_text: The user's new message.

        Returns:
            ProviderSuccess with the reply, or ProviderFailure with the cause.
        """
        # Falls back to the class name when the provider cannot name itself
        provider_id = provider.__class__.__name__
        try:
            provider_id = provider.identify()
            cause = await provider.probe()
            if cause is not None:
                raise ProviderUnavailableError(cause)

            text = await provider.generate(history, new_text)
            if not text or not text.strip():
                raise ProviderError(f"{provider_id} returned an empty response")
        except Exception as e:
            return ProviderFailure(provider_id=provider_id, cause=_describe(e))

        return ProviderSuccess(text=text, provider_id=provider_id)

    async def run(self, history: list[Message], new_text: str) -> Outcome:
        """Walk the chain until a provider answers.

        Args:
            history: Persisted history. A trailing user turn equal to
                new_text is the turn being answered and is not sent as context.
            new_text: The user's new message.

        Returns:
            ProviderSuccess from the first provider that answered, or
            Exhausted carrying the last failure's cause.
        """
        context = history
        if history and history[-1].is_user and history[-1].text == new_text:
            context = history[:-1]

        failures: list[ProviderFailure] = []
        for provider in self.providers:
            logger.info(f"Trying provider {len(failures) + 1}/{len(self.providers)}: {provider.__class__.__name__}")
            result = await self.attempt(provider, context, new_text)

            if isinstance(result, ProviderSuccess):
                logger.info(f"Provider {result.provider_id} answered after {len(failures)} failure(s)")
                return result

            logger.warning(f"Provider {result.provider_id} failed: {result.cause}")
            failures.append(result)

        last_cause = failures[-1].cause if failures else NO_PROVIDERS_CAUSE
        logger.error(f"All {len(failures)} provider(s) failed; last cause: {last_cause}")
        return Exhausted(last_cause=last_cause, failures=failures)

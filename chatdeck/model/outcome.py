"""Tagged results for provider attempts and for a whole failover run."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProviderSuccess:
    """A provider returned a non-empty reply."""

    text: str
    provider_id: str


@dataclass(frozen=True)
class ProviderFailure:
    """A provider failed (error, empty reply, or capability unavailable)."""

    provider_id: str
    cause: str


@dataclass(frozen=True)
class Exhausted:
    """Every provider in the chain failed.

    Attributes:
        last_cause: Description of the final failure in chain order.
        failures: Every failure, in the order the providers were attempted.
    """

    last_cause: str
    failures: list[ProviderFailure] = field(default_factory=list)


ProviderAttempt = ProviderSuccess | ProviderFailure
Outcome = ProviderSuccess | Exhausted

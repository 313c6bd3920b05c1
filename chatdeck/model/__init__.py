"""chatdeck domain models - pure business entities.

These dataclasses have no dependencies on storage, providers or the
front end.
"""

from chatdeck.model.outcome import (
    Exhausted,
    Outcome,
    ProviderAttempt,
    ProviderFailure,
    ProviderSuccess,
)
from chatdeck.model.session import Message, Session

__all__ = [
    # Session
    "Message",
    "Session",
    # Outcome
    "Exhausted",
    "Outcome",
    "ProviderAttempt",
    "ProviderFailure",
    "ProviderSuccess",
]

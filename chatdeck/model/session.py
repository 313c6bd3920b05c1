"""Domain models for conversation sessions and their messages."""

from dataclasses import dataclass
from typing import Any


@dataclass
class Session:
    """An entry in the session index.

    Attributes:
        id: Unique, monotonic identifier (creation timestamp in milliseconds).
        title: Display title. Rewritten once, from the first user message.
    """

    id: int
    title: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return {"id": self.id, "title": self.title}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Session":
        """Create instance from a stored dictionary.

        Args:
            data: Dictionary read from the durable store.

        Returns:
            Session instance.
        """
        return cls(id=int(data["id"]), title=str(data.get("title", "")))


@dataclass(frozen=True)
class Message:
    """A single conversation turn.

    Attributes:
        text: Message body (assistant replies include the provider footer).
        is_user: True for user turns, False for assistant/diagnostic turns.
    """

    text: str
    is_user: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return {"text": self.text, "is_user": self.is_user}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Message":
        """Create instance from a stored dictionary."""
        return cls(text=str(data.get("text", "")), is_user=bool(data.get("is_user", False)))

"""Provider capability contract and shared helpers."""

from abc import ABC, abstractmethod
from typing import Any

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from chatdeck.model import Message


class ProviderError(Exception):
    """A provider could not produce a reply."""


class ProviderUnavailableError(ProviderError):
    """The provider's capability is missing or reports itself unavailable."""


class Provider(ABC):
    """One backend able to answer a conversation turn.

    Subclasses raise (any exception) from ``generate`` on failure. The
    failover loop turns exceptions into tagged results, so providers never
    need to catch their own transport errors.
    """

    kind: str = "remote"

    @abstractmethod
    def identify(self) -> str:
        """Identifier shown in the reply footer."""
        ...

    async def probe(self) -> str | None:
        """Check the capability is present.

        Returns:
            None when available, otherwise a description of why not.
        """
        return None

    async def available(self) -> bool:
        """True if the capability is present and reports availability."""
        return await self.probe() is None

    @abstractmethod
    async def generate(self, history: list[Message], new_text: str) -> str:
        """Produce a reply.

        Args:
            history: Prior turns, oldest first, NOT including new_text.
            new_text: The user's new message.

        Returns:
            Reply text.
        """
        ...


def to_chat_messages(history: list[Message], new_text: str) -> list[BaseMessage]:
    """Convert stored turns plus the new user text to role-tagged messages."""
    messages: list[BaseMessage] = [
        HumanMessage(content=m.text) if m.is_user else AIMessage(content=m.text)
        for m in history
    ]
    messages.append(HumanMessage(content=new_text))
    return messages


def extract_text(content: Any) -> str:
    """Extract text from message content, handling string and structured formats.

    Some providers return content as a list of typed blocks:
    [{"type": "thinking", ...}, {"type": "text", "text": "answer"}]

    Blocks may be dicts or objects with type/text attributes.

    Returns:
        Extracted text content, or empty string if no text blocks found.
    """
    if content is None:
        return ""
    if not isinstance(content, list):
        return str(content)

    text_parts = []
    for block in content:
        if isinstance(block, str):
            text_parts.append(block)
        elif isinstance(block, dict):
            if block.get("type") == "text" and block.get("text"):
                text_parts.append(block["text"])
        elif hasattr(block, "type") and hasattr(block, "text"):
            if getattr(block, "type") == "text" and getattr(block, "text"):
                text_parts.append(block.text)
    return "\n".join(text_parts)

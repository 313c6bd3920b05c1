"""Base abstractions for the slash-command system."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from chatdeck.model import Session
    from chatdeck.runtime import ChatClient
    from chatdeck.terminal import TerminalChannel


@dataclass
class CommandDefinition:
    """Metadata for a registered command."""

    name: str  # e.g., "new", "switch", "delete"
    description: str  # Short description for /help
    hidden: bool = False  # If True, omit from /help
    args_description: str | None = None  # e.g., "<n>" for /switch


@dataclass
class CommandContext:
    """Runtime context passed to command handlers."""

    client: "ChatClient"
    terminal: "TerminalChannel"
    command_router: Any = None  # CommandRouter, avoid circular import


@dataclass
class CommandResult:
    """Result from a command handler."""

    response: str | None = None  # Text to show the user
    exit: bool = False  # If True, the front end shuts down


class CommandHandler(ABC):
    """Base class for command implementations."""

    @property
    @abstractmethod
    def definition(self) -> CommandDefinition:
        """Command metadata."""
        ...

    @abstractmethod
    async def handle(self, args: str, context: CommandContext) -> CommandResult:
        """Execute the command."""
        ...


def resolve_session(context: CommandContext, args: str) -> "Session | None":
    """Resolve a 1-based position from /list to a session.

    Returns:
        The session, or None if args is not a valid position.
    """
    try:
        position = int(args.strip())
    except ValueError:
        return None

    sessions = context.client.sessions
    if 1 <= position <= len(sessions):
        return sessions[position - 1]
    return None

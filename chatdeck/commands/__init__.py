"""Slash-command system for the chatdeck terminal."""

from chatdeck.commands.base import (
    CommandContext,
    CommandDefinition,
    CommandHandler,
    CommandResult,
    resolve_session,
)
from chatdeck.commands.router import CommandRouter, parse_command

__all__ = [
    "CommandContext",
    "CommandDefinition",
    "CommandHandler",
    "CommandResult",
    "CommandRouter",
    "parse_command",
    "resolve_session",
]

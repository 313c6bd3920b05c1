"""Command handlers for the chatdeck terminal."""

from chatdeck.commands.base import CommandHandler
from chatdeck.commands.handlers.delete import DeleteCommand
from chatdeck.commands.handlers.help import HelpCommand
from chatdeck.commands.handlers.new import NewCommand
from chatdeck.commands.handlers.quit import QuitCommand
from chatdeck.commands.handlers.sessions import ListCommand
from chatdeck.commands.handlers.status import StatusCommand
from chatdeck.commands.handlers.switch import SwitchCommand


def get_framework_commands() -> list[CommandHandler]:
    """Return all command handlers for registration.

    Returns:
        List of command handler instances.
    """
    return [
        NewCommand(),
        ListCommand(),
        SwitchCommand(),
        DeleteCommand(),
        StatusCommand(),
        HelpCommand(),
        QuitCommand(),
    ]


__all__ = [
    "DeleteCommand",
    "get_framework_commands",
    "HelpCommand",
    "ListCommand",
    "NewCommand",
    "QuitCommand",
    "StatusCommand",
    "SwitchCommand",
]

"""Quit command handler."""

from typing import TYPE_CHECKING

from chatdeck.commands.base import CommandDefinition, CommandHandler, CommandResult

if TYPE_CHECKING:
    from chatdeck.commands.base import CommandContext


class QuitCommand(CommandHandler):
    """Leave the client (pending replies are still saved)."""

    @property
    def definition(self) -> CommandDefinition:
        """Command metadata."""
        return CommandDefinition(
            name="quit",
            description="Exit after pending replies are saved",
        )

    async def handle(self, args: str, context: "CommandContext") -> CommandResult:
        return CommandResult(exit=True)

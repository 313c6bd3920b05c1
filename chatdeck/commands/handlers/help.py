"""Help command handler."""

from typing import TYPE_CHECKING

from chatdeck.commands.base import CommandDefinition, CommandHandler, CommandResult

if TYPE_CHECKING:
    from chatdeck.commands.base import CommandContext


class HelpCommand(CommandHandler):
    """Display available commands."""

    @property
    def definition(self) -> CommandDefinition:
        """Command metadata."""
        return CommandDefinition(
            name="help",
            description="Show available commands",
        )

    async def handle(self, args: str, context: "CommandContext") -> CommandResult:
        """Execute the help command.

        Args:
            args: Command arguments (unused).
            context: Command execution context.

        Returns:
            CommandResult with formatted help text.
        """
        commands = []
        if context.command_router:
            commands = context.command_router.list_commands()

        if not commands:
            return CommandResult(response="No commands available.")

        lines = ["Available commands:\n"]
        for cmd in commands:
            args_hint = f" {cmd.args_description}" if cmd.args_description else ""
            lines.append(f"/{cmd.name}{args_hint} - {cmd.description}")
        lines.append("\nAnything else is sent to the active conversation.")

        return CommandResult(response="\n".join(lines))

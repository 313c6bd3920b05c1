"""Command routing system."""

from chatdeck.commands.base import CommandContext, CommandDefinition, CommandHandler, CommandResult


def parse_command(line: str) -> tuple[str, str]:
    """Split "/name args" into (name, args). Non-commands return ("", line)."""
    stripped = line.strip()
    if not stripped.startswith("/"):
        return ("", line)

    parts = stripped.split(maxsplit=1)
    command = parts[0][1:]
    args = parts[1] if len(parts) > 1 else ""
    return (command, args)


class CommandRouter:
    """Routes slash commands to registered handlers."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}

    def register(self, handler: CommandHandler) -> None:
        """Register a command handler.

        Args:
            handler: Command handler to register.
        """
        self._handlers[handler.definition.name] = handler

    def get_handler(self, command_name: str) -> CommandHandler | None:
        return self._handlers.get(command_name)

    def list_commands(self, include_hidden: bool = False) -> list[CommandDefinition]:
        """List all registered commands.

        Args:
            include_hidden: Whether to include hidden commands.

        Returns:
            List of command definitions.
        """
        return [
            h.definition
            for h in self._handlers.values()
            if include_hidden or not h.definition.hidden
        ]

    async def route(self, line: str, context: CommandContext) -> CommandResult | None:
        """Route an input line to its handler.

        Args:
            line: Raw input line.
            context: Command execution context.

        Returns:
            CommandResult if the line was a command, None if it is chat text.
        """
        command_name, args = parse_command(line)
        if not command_name:
            return None

        handler = self.get_handler(command_name)
        if handler is None:
            return CommandResult(response=f"Unknown command /{command_name}. Type /help for commands.")

        return await handler.handle(args, context)

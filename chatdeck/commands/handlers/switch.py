"""Switch conversation command handler."""

from typing import TYPE_CHECKING

from chatdeck.commands.base import CommandDefinition, CommandHandler, CommandResult, resolve_session

if TYPE_CHECKING:
    from chatdeck.commands.base import CommandContext


class SwitchCommand(CommandHandler):
    """Show another conversation."""

    @property
    def definition(self) -> CommandDefinition:
        """Command metadata."""
        return CommandDefinition(
            name="switch",
            description="Switch to a conversation by its /list number",
            args_description="<n>",
        )

    async def handle(self, args: str, context: "CommandContext") -> CommandResult:
        session = resolve_session(context, args)
        if session is None:
            return CommandResult(response="Usage: /switch <n> (see /list)")

        # The view re-renders through the registry listener
        context.client.select_session(session.id)
        return CommandResult()

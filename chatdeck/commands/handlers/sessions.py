"""Session list command handler."""

from typing import TYPE_CHECKING

from chatdeck.commands.base import CommandDefinition, CommandHandler, CommandResult

if TYPE_CHECKING:
    from chatdeck.commands.base import CommandContext

GENERATING_MARK = "⏳"
IDLE_MARK = "💬"


class ListCommand(CommandHandler):
    """Show all conversations, marking the active one and those generating."""

    @property
    def definition(self) -> CommandDefinition:
        """Command metadata."""
        return CommandDefinition(
            name="list",
            description="List conversations",
        )

    async def handle(self, args: str, context: "CommandContext") -> CommandResult:
        client = context.client
        sessions = client.sessions
        if not sessions:
            return CommandResult(response="No conversations.")

        lines = []
        for position, session in enumerate(sessions, start=1):
            active = ">" if session.id == client.active_session_id else " "
            mark = GENERATING_MARK if client.is_generating(session.id) else IDLE_MARK
            lines.append(f"{active} {position}. {mark} {session.title}")
        return CommandResult(response="\n".join(lines))

"""Status command handler."""

from typing import TYPE_CHECKING

from chatdeck.commands.base import CommandDefinition, CommandHandler, CommandResult

if TYPE_CHECKING:
    from chatdeck.commands.base import CommandContext


class StatusCommand(CommandHandler):
    """Display the active conversation and the provider chain."""

    @property
    def definition(self) -> CommandDefinition:
        """Command metadata."""
        return CommandDefinition(
            name="status",
            description="Show conversation and provider status",
        )

    async def handle(self, args: str, context: "CommandContext") -> CommandResult:
        client = context.client
        session = client.active_session

        lines = [f"Conversation: {session.title if session else 'none'}"]
        lines.append(f"Messages: {len(client.messages)}")
        if session and client.is_generating(session.id):
            lines.append("Generating a reply...")

        generating = [s.title for s in client.sessions if client.is_generating(s.id)]
        lines.append(f"Generating: {', '.join(generating) if generating else 'nothing'}")

        lines.append("Providers (in failover order):")
        for position, provider in enumerate(client.providers, start=1):
            lines.append(f"  {position}. {provider.identify()} [{provider.kind}]")

        return CommandResult(response="\n".join(lines))

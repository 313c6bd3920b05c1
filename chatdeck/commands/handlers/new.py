"""New conversation command handler."""

import logging
from typing import TYPE_CHECKING

from chatdeck.commands.base import CommandDefinition, CommandHandler, CommandResult

if TYPE_CHECKING:
    from chatdeck.commands.base import CommandContext

logger = logging.getLogger(__name__)


class NewCommand(CommandHandler):
    """Start a fresh conversation."""

    @property
    def definition(self) -> CommandDefinition:
        """Command metadata."""
        return CommandDefinition(
            name="new",
            description="Start a new conversation",
        )

    async def handle(self, args: str, context: "CommandContext") -> CommandResult:
        """Create a session and switch the view to it.

        Conversations already generating keep running in the background.
        """
        session = context.client.create_session()
        logger.debug(f"/new created session {session.id}")
        return CommandResult(response=f"Started: {session.title}")

"""Delete conversation command handler."""

import logging
from typing import TYPE_CHECKING

from chatdeck.commands.base import CommandDefinition, CommandHandler, CommandResult, resolve_session

if TYPE_CHECKING:
    from chatdeck.commands.base import CommandContext

logger = logging.getLogger(__name__)

CONFIRM_ANSWERS = {"y", "yes"}


class DeleteCommand(CommandHandler):
    """Delete a conversation after explicit confirmation."""

    @property
    def definition(self) -> CommandDefinition:
        """Command metadata."""
        return CommandDefinition(
            name="delete",
            description="Delete a conversation by its /list number",
            args_description="<n>",
        )

    async def handle(self, args: str, context: "CommandContext") -> CommandResult:
        """Ask for confirmation, then delete.

        Without arguments the active conversation is targeted.
        """
        client = context.client
        if args.strip():
            session = resolve_session(context, args)
        else:
            session = client.active_session
        if session is None:
            return CommandResult(response="Usage: /delete <n> (see /list)")

        answer = await context.terminal.ask(f"Delete \"{session.title}\"? [y/N] ")
        if answer.strip().lower() not in CONFIRM_ANSWERS:
            return CommandResult(response="Cancelled.")

        if client.is_generating(session.id):
            logger.info(f"Deleting session {session.id} while a reply is in flight")
        client.delete_session(session.id)
        return CommandResult(response=f"Deleted: {session.title}")

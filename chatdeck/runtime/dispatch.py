"""Dispatch engine: the send-message protocol for one session.

The only component that spans an await. The target session id and the
user's text are captured when the send is accepted; the live Active View
Pointer is consulted only at the two reconciliation points (optimistic
append, final replace).
"""

import logging

from chatdeck.core.config import ChatConfig
from chatdeck.model import Exhausted, Message, Outcome
from chatdeck.runtime.controller import SessionController
from chatdeck.runtime.failover import FailoverLoop
from chatdeck.runtime.registry import SessionRegistry

logger = logging.getLogger(__name__)


class DispatchEngine:
    """Sends drafts to the provider chain, at most one in flight per session."""

    def __init__(
        self,
        controller: SessionController,
        registry: SessionRegistry,
        failover: FailoverLoop,
        chat_config: ChatConfig | None = None,
    ):
        self.controller = controller
        self.registry = registry
        self.failover = failover
        self.chat_config = chat_config or ChatConfig()

    def format_reply(self, outcome: Outcome) -> Message:
        """Turn a failover outcome into the assistant message to persist."""
        if isinstance(outcome, Exhausted):
            text = self.chat_config.error_template.format(cause=outcome.last_cause)
        else:
            text = outcome.text + self.chat_config.footer_template.format(provider=outcome.provider_id)
        return Message(text=text, is_user=False)

    async def submit(self, session_id: int) -> Outcome | None:
        """Send the session's draft.

        Silently ignored (returns None) when the draft is blank or the session
        already has a request in flight.

        Args:
            session_id: Session whose draft is sent.

        Returns:
            The failover outcome, or None if the send was not accepted.

        Raises:
            Exception: Store failures propagate; the session is still removed
                from the Processing Set.
        """
        draft = self.registry.draft(session_id)
        if not draft.strip() or self.registry.is_generating(session_id):
            return None

        target_session_id = session_id
        user_text = draft
        user_message = Message(text=user_text, is_user=True)

        self.registry.set_draft(target_session_id, "")
        self.registry.append_rendered(target_session_id, user_message)

        previous = self.controller.load_messages(target_session_id)
        history = [*previous, user_message]
        self.controller.save_messages(target_session_id, history)

        if not previous:
            self.controller.retitle_session(target_session_id, self.controller.derive_title(user_text))

        self.registry.begin_processing(target_session_id)
        try:
            outcome = await self.failover.run(history, user_text)
            self._record_reply(target_session_id, self.format_reply(outcome))
        finally:
            self.registry.end_processing(target_session_id)

        return outcome

    def _record_reply(self, session_id: int, reply: Message) -> None:
        # Session deleted while the request was in flight: do not resurrect its key
        if not self.registry.has(session_id):
            logger.warning(f"Session {session_id} was deleted during dispatch; dropping reply")
            return

        # Re-read: the persisted sequence may have changed since the send began
        latest = self.controller.load_messages(session_id)
        final = [*latest, reply]
        self.controller.save_messages(session_id, final)

        if self.registry.replace_rendered(session_id, final):
            logger.debug(f"Reconciled view for session {session_id}")
        else:
            logger.info(f"Reply stored for background session {session_id}")

"""Terminal front end: renders registry state and feeds input to the client.

Input is read on a worker thread so the event loop keeps running replies for
every conversation while the user types, switches or deletes.
"""

import asyncio
import logging
import sys
from collections.abc import Callable
from typing import TextIO

from chatdeck.commands import CommandContext, CommandRouter
from chatdeck.commands.handlers import get_framework_commands
from chatdeck.model import Message
from chatdeck.runtime import ChatClient, RegistryEvent

logger = logging.getLogger(__name__)

USER_PREFIX = "you"
ASSISTANT_PREFIX = "ai"
GENERATING_NOTICE = "(writing a reply...)"


class TerminalChannel:
    """Console renderer and line reader for one ChatClient."""

    def __init__(
        self,
        client: ChatClient,
        output: TextIO | None = None,
        input_func: Callable[[str], str] = input,
    ):
        self.client = client
        self.output = output or sys.stdout
        self._input_func = input_func
        self._rendered_count = 0

    def write(self, text: str) -> None:
        print(text, file=self.output, flush=True)

    async def read_line(self, prompt: str = "") -> str | None:
        """Read one line without blocking the loop. None on end of input."""
        try:
            return await asyncio.to_thread(self._input_func, prompt)
        except EOFError:
            return None

    async def ask(self, question: str) -> str:
        answer = await self.read_line(question)
        return answer or ""

    def prompt(self) -> str:
        session = self.client.active_session
        title = session.title if session else "chatdeck"
        return f"[{title}] > "

    def _render_message(self, message: Message) -> None:
        prefix = USER_PREFIX if message.is_user else ASSISTANT_PREFIX
        self.write(f"{prefix}: {message.text}")

    def _title_of(self, session_id: int | None) -> str:
        if session_id is None:
            return ""
        session = self.client.registry.find(session_id)
        return session.title if session else str(session_id)

    def on_registry_event(self, event: RegistryEvent, session_id: int | None) -> None:
        """Registry listener: keep the console in step with session state."""
        if event is RegistryEvent.ACTIVE:
            self.write(f"\n=== {self._title_of(session_id)} ===")
            messages = self.client.messages
            if not messages:
                self.write("What can I help you with?")
            for message in messages:
                self._render_message(message)
            self._rendered_count = len(messages)
            if self.client.is_generating(session_id):
                self.write(GENERATING_NOTICE)

        elif event is RegistryEvent.MESSAGES:
            messages = self.client.messages
            if len(messages) < self._rendered_count:
                self._rendered_count = 0
            for message in messages[self._rendered_count:]:
                # The user's own line is already on screen
                if not message.is_user:
                    self._render_message(message)
            self._rendered_count = len(messages)

        elif event is RegistryEvent.PROCESSING and session_id is not None:
            generating = self.client.is_generating(session_id)
            if self.client.registry.is_active(session_id):
                if generating:
                    self.write(GENERATING_NOTICE)
            elif not generating and self.client.registry.has(session_id):
                self.write(f"\n[reply ready in \"{self._title_of(session_id)}\" - /list to find it]")


class ChatApp:
    """Interactive loop tying the terminal, the command router and the client."""

    def __init__(self, client: ChatClient, terminal: TerminalChannel | None = None):
        self.client = client
        self.terminal = terminal or TerminalChannel(client)
        self.router = CommandRouter()
        for handler in get_framework_commands():
            self.router.register(handler)
        self.context = CommandContext(
            client=client,
            terminal=self.terminal,
            command_router=self.router,
        )
        self._tasks: set[asyncio.Task] = set()

    async def run(self) -> None:
        """Open the client and process input until /quit or end of input."""
        self.client.subscribe(self.terminal.on_registry_event)
        self.client.open()
        self.terminal.write("Type /help for commands.")

        while True:
            line = await self.terminal.read_line(self.terminal.prompt())
            if line is None:
                break
            if not line.strip():
                self.retry_draft()
                continue

            result = await self.router.route(line, self.context)
            if result is None:
                self.send(line)
                continue
            if result.response:
                self.terminal.write(result.response)
            if result.exit:
                break

        await self.shutdown()

    def send(self, text: str) -> asyncio.Task | None:
        """Submit text to the active conversation in the background."""
        session_id = self.client.active_session_id
        if session_id is None:
            return None
        self.client.update_draft(session_id, text)
        if self.client.is_generating(session_id):
            # Kept as the draft so a later send can retry it
            self.terminal.write(
                "Still answering your previous message here; your text is kept as a draft. "
                "Send an empty line once the reply arrives, or use another conversation (/new)."
            )
            return None

        task = asyncio.create_task(self.client.submit(session_id))
        self._tasks.add(task)
        task.add_done_callback(self._on_send_done)
        return task

    def retry_draft(self) -> asyncio.Task | None:
        """Send the active conversation's kept draft, if there is one."""
        session_id = self.client.active_session_id
        if session_id is None:
            return None
        draft = self.client.draft(session_id)
        if not draft.strip():
            return None
        return self.send(draft)

    def _on_send_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Send failed: {error}", exc_info=error)
            self.terminal.write(f"Could not save the reply: {error}")

    async def shutdown(self) -> None:
        """Wait for in-flight replies so they are persisted, then close."""
        if self._tasks:
            self.terminal.write(f"Waiting for {len(self._tasks)} pending repl(ies)...")
            await asyncio.gather(*self._tasks, return_exceptions=True)
        self.client.close()

"""Main Textual TUI application.

Orchestrates the UI components and drives a ChatSession from user input.
"""

import asyncio
import logging

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Header

from ..chat.session import ChatSession
from ..exceptions import CodeaskError, EmptyResourceSetError
from ..memory.models import QuestionStatus
from ..stream.handlers import StreamHandlers
from .styles import APP_CSS
from .widgets import HistoryInput, StatusBar, TranscriptView

logger = logging.getLogger(__name__)


class CodeaskApp(App):
    """Textual TUI for a codeask chat session."""

    CSS = APP_CSS
    TITLE = "codeask"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("escape", "cancel_turn", "Cancel"),
        Binding("ctrl+k", "clear_chat", "Clear Chat"),
    ]

    def __init__(self, session: ChatSession) -> None:
        super().__init__()
        self._session = session

    def compose(self) -> ComposeResult:
        yield Header()
        yield TranscriptView(id="transcript")
        yield HistoryInput(
            placeholder="@resource question...",
            id="question-input",
        )
        yield StatusBar(id="status-bar")

    async def on_mount(self) -> None:
        """Called when app is mounted."""
        transcript = self.query_one("#transcript", TranscriptView)
        transcript.border_title = "Conversation"
        self._refresh()
        self.query_one("#question-input", HistoryInput).focus()
        self._start_session()

    @work(exclusive=True, group="start")
    async def _start_session(self) -> None:
        try:
            await self._session.start()
        except CodeaskError as e:
            logger.warning("Session start failed: %s", e)
            self.notify(str(e), title="Could not reach the answer server", severity="error")
            return
        self.sub_title = str(self._session.model)
        self._refresh()

    def _refresh(self) -> None:
        self.query_one("#transcript", TranscriptView).sync(self._session.messages)
        thread = self._session.threads.thread
        self.query_one("#status-bar", StatusBar).update_status(
            model=self._session.model,
            streaming=self._session.in_flight,
            resources=thread.resources if thread else None,
        )

    def on_input_submitted(self, event: HistoryInput.Submitted) -> None:
        """Handle question submission."""
        question = event.value.strip()
        if not question:
            return
        if self._session.in_flight:
            self.notify("Wait for the current answer or press Esc", severity="warning")
            return

        question_input = self.query_one("#question-input", HistoryInput)
        question_input.add_to_history(question)
        question_input.value = ""
        self._ask(question)

    @work(exclusive=True, group="turn")
    async def _ask(self, question: str) -> None:
        """Run one turn as a background async worker."""
        handlers = StreamHandlers(
            on_meta=self._refresh,
            on_reasoning_delta=lambda _delta: self._refresh(),
            on_text_delta=lambda _delta: self._refresh(),
            on_tool_call=lambda _tool: self._refresh(),
            on_error=lambda message: self.notify(message, title="Stream error", severity="error"),
        )

        try:
            result = await self._session.ask(question, handlers=handlers)
        except EmptyResourceSetError:
            self.notify(
                "No resources configured. Add resources to your answer server config.",
                severity="error",
            )
        except CodeaskError as e:
            self.notify(str(e), severity="error")
        else:
            if result.status == QuestionStatus.CANCELED:
                self.notify("Answer canceled", severity="warning")
        finally:
            self._refresh()

    def action_cancel_turn(self) -> None:
        """Cancel the answer being streamed."""
        if self._session.in_flight and self._session.request_cancel():
            self.notify("Canceling...")

    def action_clear_chat(self) -> None:
        """Clear the transcript. The thread is kept."""
        if self._session.in_flight:
            return
        self._session.clear_messages()
        self._refresh()


async def run_textual_tui(session: ChatSession) -> None:
    """Run the Textual TUI.

    Args:
        session: Chat session the TUI drives (store already connected)
    """
    app = CodeaskApp(session)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass

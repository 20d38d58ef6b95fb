"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Question recall in the input line
- Transcript rendering and scrolling
- Status bar text
"""

from rich.text import Text
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.widgets import Input, Static

from ..chat.models import Message
from ..client.models import ModelConfig
from .formatting import format_message, role_label
from .history import QuestionHistory


class MessageView(Vertical):
    """One transcript entry: role label above the rendered content."""

    def __init__(self, message: Message, *args, **kwargs) -> None:
        super().__init__(*args, classes="message", **kwargs)
        self.message = message
        self._label = Static(role_label(message), classes="message-label")
        self._body = Static(format_message(message), classes="message-body")

    def compose(self):
        yield self._label
        yield self._body

    def refresh_message(self) -> None:
        """Re-render after the underlying message was mutated."""
        self._label.update(role_label(self.message))
        self._body.update(format_message(self.message))


class TranscriptView(VerticalScroll):
    """Scrollable transcript that mirrors the session's message list."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._views: list[MessageView] = []

    def sync(self, messages: list[Message]) -> None:
        """Mount views for new messages and re-render the last one."""
        if len(messages) < len(self._views) or any(
            view.message is not message for view, message in zip(self._views, messages)
        ):
            self.remove_children()
            self._views = []

        for message in messages[len(self._views):]:
            view = MessageView(message)
            self._views.append(view)
            self.mount(view)

        if self._views:
            self._views[-1].refresh_message()
        self.scroll_end(animate=False)


class HistoryInput(Input):
    """Question input that recalls earlier questions with Up and Down."""

    BINDINGS = [
        Binding("up", "history_previous", "Previous question", show=False),
        Binding("down", "history_next", "Next question", show=False),
    ]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.history = QuestionHistory()

    def add_to_history(self, question: str) -> None:
        self.history.record(question)

    def action_history_previous(self) -> None:
        self._show(self.history.previous(self.value))

    def action_history_next(self) -> None:
        self._show(self.history.next())

    def _show(self, text: str | None) -> None:
        if text is None:
            return
        self.value = text
        self.cursor_position = len(text)


class StatusBar(Static):
    """One-line status: key hints, streaming state and model."""

    def update_status(
        self,
        model: ModelConfig | None = None,
        streaming: bool = False,
        resources: list[str] | None = None,
    ) -> None:
        hints = "[Esc] Cancel" if streaming else "[@resource] Ask question  [Ctrl+K] Clear"
        parts = [hints + "  [Ctrl+C] Quit"]
        if resources:
            parts.append(", ".join(resources))
        if model is not None:
            parts.append(str(model))
        self.update(Text(" | ".join(parts)))

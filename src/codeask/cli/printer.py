"""Plain streaming output for the ask and chat commands.

Writes reasoning inside <thinking> tags, answer text as it arrives, and one
line per tool call.
"""

from rich.console import Console

from ..stream.handlers import StreamHandlers


class StreamPrinter:
    """Renders stream callbacks onto a rich console."""

    def __init__(self, console: Console, error_console: Console | None = None) -> None:
        self.console = console
        self.error_console = error_console or console
        self._received_meta = False
        self._in_reasoning = False
        self._has_text = False

    def handlers(self) -> StreamHandlers:
        return StreamHandlers(
            on_meta=self.on_meta,
            on_reasoning_delta=self.on_reasoning_delta,
            on_text_delta=self.on_text_delta,
            on_tool_call=self.on_tool_call,
            on_error=self.on_error,
        )

    def _write(self, text: str) -> None:
        self.console.print(text, end="", markup=False, highlight=False, soft_wrap=True)

    def _close_reasoning(self, suffix: str = "\n\n") -> None:
        if self._in_reasoning:
            self._write("\n</thinking>" + suffix)
            self._in_reasoning = False

    def on_meta(self) -> None:
        if not self._received_meta:
            self.console.print("[dim]creating collection...[/dim]\n")
            self._received_meta = True

    def on_reasoning_delta(self, delta: str) -> None:
        if not self._in_reasoning:
            self._write("<thinking>\n")
            self._in_reasoning = True
        self._write(delta)

    def on_text_delta(self, delta: str) -> None:
        self._close_reasoning()
        self._has_text = True
        self._write(delta)

    def on_tool_call(self, tool: str) -> None:
        self._close_reasoning()
        if self._has_text:
            self._write("\n")
        self.console.print(f"[{tool}]", markup=False, highlight=False)

    def on_error(self, message: str) -> None:
        self.error_console.print(f"\nError: {message}", style="red", markup=False, highlight=False)

    def finish(self) -> None:
        """Close any open reasoning block and end the answer."""
        self._close_reasoning(suffix="\n")
        self._write("\n\n")

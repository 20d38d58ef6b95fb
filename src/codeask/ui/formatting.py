"""Text formatting for transcript rendering.

Hides how messages and their chunks turn into rich renderables.
"""

from rich.console import Group, RenderableType
from rich.markdown import Markdown
from rich.text import Text

from ..chat.models import (
    ChunksContent,
    Message,
    ReasoningChunk,
    Role,
    TextChunk,
    TextContent,
    ToolChunk,
)
from ..stream.models import ToolStatus

ROLE_LABELS = {
    Role.USER: ("You", "bold cyan"),
    Role.SYSTEM: ("SYS", "bold blue"),
    Role.ASSISTANT: ("AI", "bold green"),
}

TOOL_MARKERS = {
    ToolStatus.PENDING: ("...", "dim"),
    ToolStatus.RUNNING: (">", "yellow"),
    ToolStatus.COMPLETED: ("+", "green"),
}


def role_label(message: Message) -> Text:
    """Label shown above a message, flagged when canceled."""
    label, style = ROLE_LABELS[message.role]
    text = Text(label, style=style)
    if message.canceled:
        text.append(" (canceled)", style="yellow")
    return text


def format_tool(chunk: ToolChunk) -> Text:
    marker, style = TOOL_MARKERS[chunk.state]
    return Text.assemble((f"[{marker}] ", style), (chunk.tool, "bold"))


def format_message(message: Message) -> RenderableType:
    """Render a message's content, chunk by chunk in arrival order."""
    content = message.content
    if isinstance(content, TextContent):
        return Text(content.content)
    if not isinstance(content, ChunksContent):
        raise TypeError(f"Unknown message content: {content!r}")

    parts: list[RenderableType] = []
    for chunk in content.chunks:
        if isinstance(chunk, ReasoningChunk):
            parts.append(Text(chunk.text, style="dim italic"))
        elif isinstance(chunk, TextChunk):
            parts.append(Markdown(chunk.text))
        elif isinstance(chunk, ToolChunk):
            parts.append(format_tool(chunk))
        else:
            raise TypeError(f"Unknown chunk: {chunk!r}")

    if not parts:
        return Text("...", style="dim")
    return Group(*parts)

"""Tests for transcript formatting."""
from rich.console import Group
from rich.text import Text

from codeask.chat import ChunksContent, Message, ReasoningChunk, Role, TextChunk, ToolChunk
from codeask.stream import ToolStatus
from codeask.ui.formatting import format_message, format_tool, role_label


def test_role_label():
    """Test role labels and the canceled flag."""
    assert role_label(Message.text(Role.USER, "q")).plain == "You"
    message = Message.text(Role.ASSISTANT, "a")
    message.canceled = True
    assert role_label(message).plain == "AI (canceled)"


def test_format_tool_marks_status():
    """Test the status marker of a tool chunk."""
    assert format_tool(ToolChunk(tool="grep", state=ToolStatus.RUNNING)).plain == "[>] grep"
    assert format_tool(ToolChunk(tool="grep", state=ToolStatus.COMPLETED)).plain == "[+] grep"


def test_format_plain_message():
    rendered = format_message(Message.text(Role.SYSTEM, "welcome"))
    assert isinstance(rendered, Text)
    assert rendered.plain == "welcome"


def test_format_chunks_in_order():
    """Test that every chunk is rendered in arrival order."""
    message = Message(
        role=Role.ASSISTANT,
        content=ChunksContent(chunks=[
            ReasoningChunk(text="thinking"),
            TextChunk(text="**answer**"),
            ToolChunk(tool="read"),
        ]),
    )

    rendered = format_message(message)

    assert isinstance(rendered, Group)
    assert len(rendered.renderables) == 3
    assert rendered.renderables[0].plain == "thinking"
    assert rendered.renderables[2].plain == "[...] read"


def test_format_empty_chunks_placeholder():
    rendered = format_message(Message(role=Role.ASSISTANT, content=ChunksContent()))
    assert rendered.plain == "..."

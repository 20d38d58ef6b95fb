"""Data models for the chat transcript.

Messages are the UI-facing projection of a turn; they are never persisted.
Assistant content that is still streaming is held as an ordered list of
typed chunks.
"""

import uuid
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from ..stream.models import ToolStatus


def generate_id() -> str:
    """Generate a unique chunk or question identifier."""
    return uuid.uuid4().hex


class Role(str, Enum):
    """Author of a transcript entry."""

    USER = "user"
    SYSTEM = "system"
    ASSISTANT = "assistant"


class TextChunk(BaseModel):
    """Accumulated answer prose."""

    id: str = Field(default_factory=generate_id)
    type: Literal["text"] = "text"
    text: str = ""


class ReasoningChunk(BaseModel):
    """Accumulated model reasoning, rendered apart from the answer."""

    id: str = Field(default_factory=generate_id)
    type: Literal["reasoning"] = "reasoning"
    text: str = ""


class ToolChunk(BaseModel):
    """One tool invocation and its current status."""

    id: str = Field(default_factory=generate_id)
    type: Literal["tool"] = "tool"
    tool: str
    state: ToolStatus = ToolStatus.PENDING
    call_id: str | None = Field(default=None, description="Server-side invocation id")


Chunk = Annotated[TextChunk | ReasoningChunk | ToolChunk, Field(discriminator="type")]


class TextContent(BaseModel):
    """Plain, final message content."""

    type: Literal["text"] = "text"
    content: str


class ChunksContent(BaseModel):
    """Structured content built incrementally while streaming."""

    type: Literal["chunks"] = "chunks"
    chunks: list[Chunk] = Field(default_factory=list)


MessageContent = Annotated[TextContent | ChunksContent, Field(discriminator="type")]


class Message(BaseModel):
    """One transcript entry."""

    role: Role
    content: MessageContent
    canceled: bool = False

    @classmethod
    def text(cls, role: Role, content: str) -> "Message":
        """Create a message with plain text content."""
        return cls(role=role, content=TextContent(content=content))

    def plain_text(self) -> str:
        """Return the answer prose of this message.

        Reasoning and tool chunks are not part of the answer.
        """
        content = self.content
        if isinstance(content, TextContent):
            return content.content
        if isinstance(content, ChunksContent):
            return "".join(
                chunk.text for chunk in content.chunks if isinstance(chunk, TextChunk)
            )
        raise TypeError(f"Unknown message content: {content!r}")

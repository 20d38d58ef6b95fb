"""Chat transcript, answer accumulation and turn orchestration."""

from .accumulator import MessageAccumulator
from .cancellation import CancellationCoordinator, CancelState
from .models import (
    Chunk,
    ChunksContent,
    Message,
    ReasoningChunk,
    Role,
    TextChunk,
    TextContent,
    ToolChunk,
)
from .session import ChatSession, TurnResult

__all__ = [
    "CancelState",
    "CancellationCoordinator",
    "ChatSession",
    "Chunk",
    "ChunksContent",
    "Message",
    "MessageAccumulator",
    "ReasoningChunk",
    "Role",
    "TextChunk",
    "TextContent",
    "ToolChunk",
    "TurnResult",
]

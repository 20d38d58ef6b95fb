"""Incremental assembly of the active assistant message.

Hides how stream events map onto transcript mutations:
- when the assistant message of a turn is created
- when a delta extends a chunk and when it opens a new one
- how repeated tool updates find the chunk they belong to
"""

import logging

from ..stream.handlers import StreamHandlers
from ..stream.models import (
    DoneEvent,
    ErrorEvent,
    MetaEvent,
    ReasoningDeltaEvent,
    StreamEvent,
    TextDeltaEvent,
    ToolStatus,
    ToolUpdatedEvent,
)
from .models import ChunksContent, Message, ReasoningChunk, Role, TextChunk, ToolChunk

logger = logging.getLogger(__name__)


class MessageAccumulator:
    """Applies stream events to the last assistant message of a transcript.

    Keeps explicit cursors to the active message and its tail chunk while a
    turn is in flight, so events never rescan the transcript.

    Example:
        accumulator = MessageAccumulator(messages)
        accumulator.begin_turn()
        async for event in stream:
            accumulator.apply(event)
        accumulator.finalize()
    """

    def __init__(self, messages: list[Message], handlers: StreamHandlers | None = None):
        self._messages = messages
        self._handlers = handlers or StreamHandlers()
        self._message: Message | None = None
        self._content: ChunksContent | None = None
        self._finalized = False

    @property
    def message(self) -> Message | None:
        """The assistant message of the current turn, if one was created."""
        return self._message

    @property
    def finalized(self) -> bool:
        return self._finalized

    def set_handlers(self, handlers: StreamHandlers | None) -> None:
        """Replace the callbacks notified of changes."""
        self._handlers = handlers or StreamHandlers()

    def begin_turn(self) -> None:
        """Reset cursors so the next content event opens a new message."""
        self._message = None
        self._content = None
        self._finalized = False

    def finalize(self) -> None:
        """Stop accepting events for this turn."""
        self._finalized = True

    def apply(self, event: StreamEvent) -> None:
        """Apply one decoded event in arrival order."""
        if self._finalized:
            logger.debug("Ignoring %s event after finalize", event.type)
            return

        if isinstance(event, MetaEvent):
            if self._handlers.on_meta:
                self._handlers.on_meta()
        elif isinstance(event, ReasoningDeltaEvent):
            self.on_reasoning_delta(event.delta)
        elif isinstance(event, TextDeltaEvent):
            self.on_text_delta(event.delta)
        elif isinstance(event, ToolUpdatedEvent):
            self.on_tool_updated(event.tool, event.state.status, event.call_id)
        elif isinstance(event, ErrorEvent):
            if self._handlers.on_error:
                self._handlers.on_error(event.message)
        elif isinstance(event, DoneEvent):
            pass
        else:
            raise TypeError(f"Unknown stream event: {event!r}")

    def on_reasoning_delta(self, delta: str) -> None:
        """Append reasoning text, opening a reasoning chunk if needed."""
        content = self._active_content()
        tail = content.chunks[-1] if content.chunks else None
        if isinstance(tail, ReasoningChunk):
            tail.text += delta
        else:
            content.chunks.append(ReasoningChunk(text=delta))

        if self._handlers.on_reasoning_delta:
            self._handlers.on_reasoning_delta(delta)

    def on_text_delta(self, delta: str) -> None:
        """Append answer text, opening a text chunk if needed."""
        content = self._active_content()
        tail = content.chunks[-1] if content.chunks else None
        if isinstance(tail, TextChunk):
            tail.text += delta
        else:
            content.chunks.append(TextChunk(text=delta))

        if self._handlers.on_text_delta:
            self._handlers.on_text_delta(delta)

    def on_tool_updated(
        self,
        tool: str,
        status: ToolStatus,
        call_id: str | None = None
    ) -> None:
        """Record a tool status change.

        The chunk is found by ``call_id`` when the server sends one, else by
        the most recent unfinished invocation of the same tool. An unknown
        invocation always opens a new chunk with the reported status.
        """
        content = self._active_content()
        chunk = self._find_tool_chunk(content, tool, call_id)

        if chunk is None:
            chunk = ToolChunk(tool=tool, state=status, call_id=call_id)
            content.chunks.append(chunk)
            started = status == ToolStatus.RUNNING
        else:
            started = status == ToolStatus.RUNNING and chunk.state != ToolStatus.RUNNING
            chunk.state = status

        if started and self._handlers.on_tool_call:
            self._handlers.on_tool_call(tool)

    def mark_canceled(self) -> Message | None:
        """Flag the turn's assistant message as canceled.

        Falls back to the last assistant message in the transcript when no
        turn cursor is held.
        """
        message = self._message
        if message is None:
            message = next(
                (m for m in reversed(self._messages) if m.role == Role.ASSISTANT),
                None,
            )
        if message is not None:
            message.canceled = True
        return message

    def answer_text(self) -> str:
        """The answer prose accumulated for this turn."""
        if self._message is None:
            return ""
        return self._message.plain_text()

    def _active_content(self) -> ChunksContent:
        if self._content is None:
            message = Message(role=Role.ASSISTANT, content=ChunksContent())
            self._messages.append(message)
            self._message = message
            # The message owns its content instance after validation
            self._content = message.content
        return self._content

    @staticmethod
    def _find_tool_chunk(
        content: ChunksContent,
        tool: str,
        call_id: str | None
    ) -> ToolChunk | None:
        for chunk in reversed(content.chunks):
            if not isinstance(chunk, ToolChunk):
                continue
            if call_id is not None:
                if chunk.call_id == call_id:
                    return chunk
            elif chunk.tool == tool and chunk.state != ToolStatus.COMPLETED:
                return chunk
        return None

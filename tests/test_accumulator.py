"""Unit tests for the message accumulator."""
import pytest

from codeask.chat import (
    ChunksContent,
    Message,
    MessageAccumulator,
    ReasoningChunk,
    Role,
    TextChunk,
    ToolChunk,
)
from codeask.stream import (
    DoneEvent,
    ErrorEvent,
    MetaEvent,
    ReasoningDeltaEvent,
    StreamHandlers,
    TextDeltaEvent,
    ToolState,
    ToolStatus,
    ToolUpdatedEvent,
)


def tool_event(tool: str, status: str, call_id: str | None = None) -> ToolUpdatedEvent:
    return ToolUpdatedEvent(tool=tool, state=ToolState(status=status), call_id=call_id)


def chunk_summary(message: Message) -> list[tuple]:
    summary = []
    for chunk in message.content.chunks:
        if isinstance(chunk, ToolChunk):
            summary.append(("tool", chunk.tool, chunk.state.value))
        else:
            summary.append((chunk.type, chunk.text))
    return summary


@pytest.fixture
def messages():
    return [Message.text(Role.SYSTEM, "welcome")]


@pytest.fixture
def accumulator(messages):
    acc = MessageAccumulator(messages)
    acc.begin_turn()
    return acc


class TestMessageAccumulator:
    """Tests for applying stream events."""

    def test_builds_chunks_in_arrival_order(self, messages, accumulator):
        """Test the reasoning, text, tool sequence."""
        for event in [
            MetaEvent(),
            ReasoningDeltaEvent(delta="foo"),
            ReasoningDeltaEvent(delta="bar"),
            TextDeltaEvent(delta="hi"),
            tool_event("build", "running"),
            DoneEvent(),
        ]:
            accumulator.apply(event)

        assert len(messages) == 2
        assert messages[-1].role == Role.ASSISTANT
        assert chunk_summary(messages[-1]) == [
            ("reasoning", "foobar"),
            ("text", "hi"),
            ("tool", "build", "running"),
        ]

    def test_interleaving_opens_new_chunks(self, messages, accumulator):
        """Test that a type switch opens a new chunk instead of merging."""
        accumulator.on_text_delta("a")
        accumulator.on_reasoning_delta("r")
        accumulator.on_text_delta("b")
        accumulator.on_text_delta("c")

        assert chunk_summary(messages[-1]) == [("text", "a"), ("reasoning", "r"), ("text", "bc")]

    def test_chunk_ids_are_unique(self, messages, accumulator):
        """Test chunk id uniqueness within a message."""
        accumulator.on_text_delta("a")
        accumulator.on_tool_updated("grep", ToolStatus.RUNNING)
        accumulator.on_text_delta("b")
        accumulator.on_reasoning_delta("c")

        ids = [chunk.id for chunk in messages[-1].content.chunks]
        assert len(ids) == len(set(ids)) == 4

    def test_meta_alone_creates_no_message(self, messages, accumulator):
        """Test that meta is not content-bearing."""
        accumulator.apply(MetaEvent())

        assert len(messages) == 1
        assert accumulator.message is None

    def test_empty_delta_is_valid(self, messages, accumulator):
        """Test that an empty delta opens the message without failing."""
        accumulator.on_text_delta("")
        accumulator.on_text_delta("")

        assert isinstance(messages[-1].content, ChunksContent)
        assert chunk_summary(messages[-1]) == [("text", "")]

    def test_new_turn_opens_new_message(self, messages, accumulator):
        """Test that begin_turn leaves the previous message untouched."""
        accumulator.on_text_delta("first")
        accumulator.finalize()
        accumulator.begin_turn()
        accumulator.on_text_delta("second")

        assert [m.plain_text() for m in messages[1:]] == ["first", "second"]

    def test_events_after_finalize_are_ignored(self, messages, accumulator):
        """Test that finalize freezes the message."""
        accumulator.on_text_delta("done")
        accumulator.finalize()
        accumulator.apply(TextDeltaEvent(delta=" more"))

        assert messages[-1].plain_text() == "done"

    def test_answer_text_excludes_reasoning_and_tools(self, accumulator):
        """Test the persisted answer text."""
        accumulator.on_reasoning_delta("thinking")
        accumulator.on_text_delta("Use ")
        accumulator.on_tool_updated("grep", ToolStatus.RUNNING)
        accumulator.on_text_delta("stores.")

        assert accumulator.answer_text() == "Use stores."


class TestToolUpdates:
    """Tests for tool chunk identity and transitions."""

    def test_call_id_identifies_invocations(self, messages, accumulator):
        """Test that two calls of the same tool stay separate."""
        accumulator.apply(tool_event("grep", "running", "c1"))
        accumulator.apply(tool_event("grep", "running", "c2"))
        accumulator.apply(tool_event("grep", "completed", "c1"))

        assert chunk_summary(messages[-1]) == [
            ("tool", "grep", "completed"),
            ("tool", "grep", "running"),
        ]

    def test_name_fallback_matches_unfinished_call(self, messages, accumulator):
        """Test updates without call id reach the open invocation."""
        accumulator.apply(tool_event("read", "pending"))
        accumulator.apply(tool_event("read", "running"))
        accumulator.apply(tool_event("read", "completed"))
        accumulator.apply(tool_event("read", "running"))

        assert chunk_summary(messages[-1]) == [
            ("tool", "read", "completed"),
            ("tool", "read", "running"),
        ]

    def test_unknown_tool_is_fresh_chunk_with_reported_status(self, messages, accumulator):
        """Test that an unannounced tool gets its own chunk."""
        accumulator.apply(tool_event("list", "completed", "c9"))

        chunk = messages[-1].content.chunks[-1]
        assert isinstance(chunk, ToolChunk)
        assert chunk.state == ToolStatus.COMPLETED
        assert chunk.call_id == "c9"

    def test_tool_call_fires_only_on_transition_to_running(self, accumulator):
        """Test the tool call started signal."""
        started = []
        accumulator.set_handlers(StreamHandlers(on_tool_call=started.append))

        accumulator.apply(tool_event("grep", "pending", "c1"))
        accumulator.apply(tool_event("grep", "running", "c1"))
        accumulator.apply(tool_event("grep", "running", "c1"))
        accumulator.apply(tool_event("grep", "completed", "c1"))
        accumulator.apply(tool_event("read", "running", "c2"))

        assert started == ["grep", "read"]


class TestHandlers:
    """Tests for callback notification."""

    def test_handlers_receive_events(self, accumulator):
        """Test that each callback fires with its payload."""
        seen = []
        accumulator.set_handlers(StreamHandlers(
            on_meta=lambda: seen.append("meta"),
            on_reasoning_delta=lambda d: seen.append(("reasoning", d)),
            on_text_delta=lambda d: seen.append(("text", d)),
            on_error=lambda m: seen.append(("error", m)),
        ))

        accumulator.apply(MetaEvent())
        accumulator.apply(ReasoningDeltaEvent(delta="r"))
        accumulator.apply(TextDeltaEvent(delta="t"))
        accumulator.apply(ErrorEvent(message="boom"))

        assert seen == ["meta", ("reasoning", "r"), ("text", "t"), ("error", "boom")]

    def test_unknown_event_raises(self, accumulator):
        """Test exhaustive dispatch."""
        with pytest.raises(TypeError):
            accumulator.apply(object())


class TestMarkCanceled:
    """Tests for cancellation marking."""

    def test_marks_active_message(self, messages, accumulator):
        """Test marking the turn's message, keeping its content."""
        accumulator.on_text_delta("partial")

        message = accumulator.mark_canceled()

        assert message is messages[-1]
        assert message.canceled
        assert message.plain_text() == "partial"

    def test_falls_back_to_last_assistant_message(self, messages):
        """Test marking without a turn in flight."""
        messages.append(Message.text(Role.ASSISTANT, "old answer"))
        messages.append(Message.text(Role.USER, "next question"))
        accumulator = MessageAccumulator(messages)

        message = accumulator.mark_canceled()

        assert message is messages[1]
        assert messages[1].canceled
        assert not messages[2].canceled

    def test_no_assistant_message(self, messages):
        """Test that marking with no assistant message is a no-op."""
        assert MessageAccumulator(messages).mark_canceled() is None


def test_reasoning_chunk_defaults():
    """Test chunk construction defaults."""
    chunk = ReasoningChunk()
    assert chunk.type == "reasoning"
    assert chunk.text == ""
    assert TextChunk(text="x").id != TextChunk(text="x").id

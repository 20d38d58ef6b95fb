"""Typed events of an answer stream.

Every record on the wire is a JSON object tagged by ``type``. The union
below is the complete event taxonomy; anything else is dropped by the
decoder.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class ToolStatus(str, Enum):
    """Lifecycle of one tool invocation."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class MetaEvent(_Event):
    """The server accepted the question and created a working context."""

    type: Literal["meta"] = "meta"


class ReasoningDeltaEvent(_Event):
    """Next fragment of the model's reasoning."""

    type: Literal["reasoning.delta"] = "reasoning.delta"
    delta: str = ""


class TextDeltaEvent(_Event):
    """Next fragment of the answer text."""

    type: Literal["text.delta"] = "text.delta"
    delta: str = ""


class ToolState(BaseModel):
    """Reported state of a tool invocation. Extra server fields are kept."""

    model_config = ConfigDict(frozen=True, extra="allow")

    status: ToolStatus


class ToolUpdatedEvent(_Event):
    """A tool invocation changed status."""

    type: Literal["tool.updated"] = "tool.updated"
    tool: str
    state: ToolState
    call_id: str | None = Field(default=None, alias="callID")


class ErrorEvent(_Event):
    """A failure reported by the server or by the transport."""

    type: Literal["error"] = "error"
    message: str


class DoneEvent(_Event):
    """The stream completed normally."""

    type: Literal["done"] = "done"


StreamEvent = Annotated[
    MetaEvent
    | ReasoningDeltaEvent
    | TextDeltaEvent
    | ToolUpdatedEvent
    | ErrorEvent
    | DoneEvent,
    Field(discriminator="type"),
]

stream_event_adapter: TypeAdapter[StreamEvent] = TypeAdapter(StreamEvent)

"""Answer stream decoding for codeask."""

from .decoder import EventStream, decode_event, decode_events, iter_sse_records
from .handlers import StreamHandlers
from .models import (
    DoneEvent,
    ErrorEvent,
    MetaEvent,
    ReasoningDeltaEvent,
    StreamEvent,
    TextDeltaEvent,
    ToolState,
    ToolStatus,
    ToolUpdatedEvent,
)

__all__ = [
    "DoneEvent",
    "ErrorEvent",
    "EventStream",
    "MetaEvent",
    "ReasoningDeltaEvent",
    "StreamEvent",
    "StreamHandlers",
    "TextDeltaEvent",
    "ToolState",
    "ToolStatus",
    "ToolUpdatedEvent",
    "decode_event",
    "decode_events",
    "iter_sse_records",
]

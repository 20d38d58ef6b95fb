"""Server-Sent-Events decoding into typed stream events.

Hides the record framing of the answer stream:
- ``event:``/``data:`` lines grouped into records by blank lines
- JSON payloads validated against the event union
- tolerant handling of malformed records and transport failures
"""

import json
import logging
from collections.abc import AsyncIterable, AsyncIterator
from typing import Any

import httpx
from pydantic import ValidationError

from .models import DoneEvent, ErrorEvent, StreamEvent, stream_event_adapter

logger = logging.getLogger(__name__)

DONE_SENTINEL = "[DONE]"


async def iter_sse_records(
    lines: AsyncIterable[str | bytes]
) -> AsyncIterator[tuple[str | None, str]]:
    """Group SSE lines into ``(event_name, data)`` records.

    Comment lines and unknown fields (``id:``, ``retry:``) are ignored.
    A trailing record without a blank line is still emitted.
    """
    event_name: str | None = None
    data_lines: list[str] = []

    async for raw_line in lines:
        line = raw_line.decode("utf-8", errors="replace") if isinstance(raw_line, bytes) else raw_line
        line = line.rstrip("\r\n")

        if not line:
            if data_lines:
                yield event_name, "\n".join(data_lines)
            event_name = None
            data_lines = []
            continue

        if line.startswith(":"):
            continue

        field, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]

        if field == "event":
            event_name = value
        elif field == "data":
            data_lines.append(value)

    if data_lines:
        yield event_name, "\n".join(data_lines)


def decode_event(event_name: str | None, data: str) -> StreamEvent | None:
    """Decode one record's data into a typed event.

    Returns:
        The event, or None if the record is malformed or of an unknown type
    """
    try:
        payload: Any = json.loads(data)
    except json.JSONDecodeError:
        logger.debug("Skipping non-JSON record: %.200s", data)
        return None

    if not isinstance(payload, dict):
        logger.debug("Skipping non-object record: %.200s", data)
        return None

    if "type" not in payload and event_name:
        payload["type"] = event_name

    try:
        return stream_event_adapter.validate_python(payload)
    except ValidationError as e:
        logger.debug("Skipping invalid record of type %r: %s", payload.get("type"), e)
        return None


async def decode_events(lines: AsyncIterable[str | bytes]) -> AsyncIterator[StreamEvent]:
    """Decode an SSE line stream into ordered stream events.

    Stops after a ``done`` event or a ``data: [DONE]`` record. A transport
    failure while reading becomes a single ErrorEvent that ends the stream.
    """
    try:
        async for event_name, data in iter_sse_records(lines):
            if data.strip() == DONE_SENTINEL:
                return

            event = decode_event(event_name, data)
            if event is None:
                continue

            yield event
            if isinstance(event, DoneEvent):
                return
    except (httpx.HTTPError, OSError) as e:
        logger.warning("Stream transport failed: %s", e)
        yield ErrorEvent(message=str(e) or e.__class__.__name__)


class EventStream:
    """Async iterator over decoded events that records what it has seen.

    Usage:
        stream = EventStream(response.aiter_lines())
        async for event in stream:
            handle(event)
        # After iteration
        print(stream.completed, stream.errors)
    """

    def __init__(self, lines: AsyncIterable[str | bytes]):
        """Initialize with an async iterable of raw SSE lines.

        Args:
            lines: Lines of the streaming response body
        """
        self._lines = lines
        self._events = decode_events(lines)
        self._saw_meta = False
        self._completed = False
        self._errors: list[str] = []

    @property
    def saw_meta(self) -> bool:
        """Whether the server announced the working context."""
        return self._saw_meta

    @property
    def completed(self) -> bool:
        """Whether the stream ended with a ``done`` event."""
        return self._completed

    @property
    def errors(self) -> list[str]:
        """Messages of every error event seen so far."""
        return list(self._errors)

    def __aiter__(self) -> "EventStream":
        return self

    async def __anext__(self) -> StreamEvent:
        event = await self._events.__anext__()
        if event.type == "meta":
            self._saw_meta = True
        elif event.type == "done":
            self._completed = True
        elif event.type == "error":
            self._errors.append(event.message)
        return event

    async def aclose(self) -> None:
        """Stop decoding and close the underlying line iterator."""
        await self._events.aclose()
        close = getattr(self._lines, "aclose", None)
        if close is not None:
            await close()

"""Pytest configuration and shared fixtures."""
import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import pytest

from codeask.client.base import AnswerClient
from codeask.client.models import ModelConfig
from codeask.exceptions import StreamTransportError
from codeask.memory.in_memory import InMemoryThreadStore
from codeask.memory.models import QuestionDraft, QuestionStatus
from codeask.resources.models import Resource
from codeask.stream.decoder import EventStream


def sse_lines(events: list[dict[str, Any] | str]) -> list[str]:
    """Frame events as SSE lines. Strings are sent as raw data."""
    lines = []
    for event in events:
        data = event if isinstance(event, str) else json.dumps(event)
        lines.extend([f"data: {data}", ""])
    return lines


async def aiter_lines(lines: list[str]) -> AsyncIterator[str]:
    for line in lines:
        yield line


class FakeAnswerClient(AnswerClient):
    """Answer client replaying scripted SSE lines."""

    def __init__(
        self,
        resources: list[str] | None = None,
        events: list[dict[str, Any] | str] | None = None,
        open_error: str | None = None,
    ):
        self.resources = resources or []
        self.events = events or []
        self.open_error = open_error
        self.requests: list[tuple[str, list[str]]] = []
        self.closed = False

    async def list_resources(self) -> list[Resource]:
        return [Resource(name=name) for name in self.resources]

    async def get_model(self) -> ModelConfig:
        return ModelConfig(provider="anthropic", model="claude-haiku")

    @asynccontextmanager
    async def ask_question_stream(self, question: str, resources: list[str]):
        self.requests.append((question, resources))
        if self.open_error:
            raise StreamTransportError(self.open_error)
        stream = EventStream(aiter_lines(sse_lines(self.events)))
        try:
            yield stream
        finally:
            await stream.aclose()

    async def close(self) -> None:
        self.closed = True


class RecordingThreadStore(InMemoryThreadStore):
    """In-memory store that records calls and can be told to fail."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[str] = []
        self.fail_on: set[str] = set()

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise RuntimeError(f"{name} unavailable")

    async def create_thread(self) -> str:
        self._record("create_thread")
        return await super().create_thread()

    async def persist_question(self, thread_id: str, question: QuestionDraft) -> str:
        self._record("persist_question")
        return await super().persist_question(thread_id, question)

    async def update_question_answer(self, question_id: str, answer: str) -> None:
        self._record("update_question_answer")
        await super().update_question_answer(question_id, answer)

    async def update_question_status(self, question_id: str, status: QuestionStatus) -> None:
        self._record("update_question_status")
        await super().update_question_status(question_id, status)


@pytest.fixture
def store():
    """Return a recording in-memory thread store."""
    return RecordingThreadStore()


@pytest.fixture
def answer_events():
    """Return a typical answer stream: reasoning, text, one tool call."""
    return [
        {"type": "meta", "collection": "svelte"},
        {"type": "reasoning.delta", "delta": "Looking at "},
        {"type": "reasoning.delta", "delta": "the docs."},
        {"type": "tool.updated", "tool": "grep", "callID": "call_1", "state": {"status": "running"}},
        {"type": "tool.updated", "tool": "grep", "callID": "call_1", "state": {"status": "completed"}},
        {"type": "text.delta", "delta": "Stores are "},
        {"type": "text.delta", "delta": "reactive."},
        {"type": "done"},
    ]


@pytest.fixture
def make_client():
    """Return a factory for scripted answer clients."""
    return FakeAnswerClient


@pytest.fixture
def make_lines():
    """Return a factory turning events into an async SSE line iterator."""
    def _make(events: list[dict[str, Any] | str]) -> AsyncIterator[str]:
        return aiter_lines(sse_lines(events))
    return _make

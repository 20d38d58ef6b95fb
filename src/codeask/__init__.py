"""
codeask: ask questions about your codebases and docs from the terminal.

Answers stream from an answer server as typed events; codeask assembles
them into a transcript and keeps each conversation thread persisted.
"""

__version__ = "0.1.0"

from .chat import ChatSession, Message, MessageAccumulator, TurnResult
from .client import AnswerClient, HttpAnswerClient, ModelConfig
from .exceptions import (
    CodeaskError,
    EmptyResourceSetError,
    LifecycleError,
    PersistenceError,
    StreamTransportError,
)
from .memory import ThreadManager, ThreadStore, create_thread_store
from .resources import merge_resources, parse_query, resolve_resources
from .stream import EventStream, StreamHandlers, decode_events

__all__ = [
    "AnswerClient",
    "ChatSession",
    "CodeaskError",
    "EmptyResourceSetError",
    "EventStream",
    "HttpAnswerClient",
    "LifecycleError",
    "Message",
    "MessageAccumulator",
    "ModelConfig",
    "PersistenceError",
    "StreamHandlers",
    "StreamTransportError",
    "ThreadManager",
    "ThreadStore",
    "TurnResult",
    "create_thread_store",
    "decode_events",
    "merge_resources",
    "parse_query",
    "resolve_resources",
]

"""Thread persistence and lifecycle for codeask.

Keeps conversation threads and their questions in step with a store.
"""

from .base import ThreadStore
from .factory import create_thread_store
from .lifecycle import ThreadManager
from .models import (
    QuestionDraft,
    QuestionRecord,
    QuestionStatus,
    ThreadQuestion,
    ThreadRecord,
    ThreadState,
)

__all__ = [
    "QuestionDraft",
    "QuestionRecord",
    "QuestionStatus",
    "ThreadManager",
    "ThreadQuestion",
    "ThreadRecord",
    "ThreadState",
    "ThreadStore",
    "create_thread_store",
]

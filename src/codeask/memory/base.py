"""Abstract base class for thread stores.

This module defines the persistence contract used by the thread lifecycle.
The abstraction hides:
- Storage format (SQLite rows, dicts)
- Persistence mechanism (file, in-memory)
- Identifier generation
- Connection management
"""

from abc import ABC, abstractmethod

from .models import QuestionDraft, QuestionRecord, QuestionStatus, ThreadRecord


class ThreadStore(ABC):
    """Abstract thread store.

    Provides a unified interface for persisting threads and their questions
    across different storage backends.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the store."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the store gracefully."""

    @abstractmethod
    async def create_thread(self) -> str:
        """Create a new thread and return its identifier."""

    @abstractmethod
    async def persist_question(self, thread_id: str, question: QuestionDraft) -> str:
        """Persist a new question of a thread and return its identifier."""

    @abstractmethod
    async def update_question_answer(self, question_id: str, answer: str) -> None:
        """Store the answer of a question and mark it answered."""

    @abstractmethod
    async def update_question_status(self, question_id: str, status: QuestionStatus) -> None:
        """Change the status of a question."""

    @abstractmethod
    async def list_threads(self, limit: int = 20) -> list[ThreadRecord]:
        """List threads, newest first."""

    @abstractmethod
    async def get_questions(self, thread_id: str) -> list[QuestionRecord]:
        """Get the questions of a thread in the order they were asked."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    async def __aenter__(self) -> "ThreadStore":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()

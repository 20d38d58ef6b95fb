"""In-memory thread store.

Simple dict-based storage for session-only threads.
Data is lost when the application exits.
"""

from datetime import datetime, timezone
from uuid import uuid4

from .base import ThreadStore
from .models import QuestionDraft, QuestionRecord, QuestionStatus, ThreadRecord


class InMemoryThreadStore(ThreadStore):
    """In-memory thread store (session-only).

    Suitable for single-shot commands or testing.
    """

    def __init__(self) -> None:
        self._threads: dict[str, ThreadRecord] = {}
        self._questions: dict[str, QuestionRecord] = {}

    async def connect(self) -> None:
        """Initialize store (no-op for in-memory)."""
        pass

    async def disconnect(self) -> None:
        """Close store (no-op for in-memory)."""
        pass

    async def create_thread(self) -> str:
        thread_id = str(uuid4())
        self._threads[thread_id] = ThreadRecord(id=thread_id)
        return thread_id

    async def persist_question(self, thread_id: str, question: QuestionDraft) -> str:
        if thread_id not in self._threads:
            raise KeyError(f"Unknown thread: {thread_id}")

        question_id = str(uuid4())
        self._questions[question_id] = QuestionRecord(
            id=question_id,
            thread_id=thread_id,
            **question.model_dump(),
        )
        self._threads[thread_id].question_count += 1
        return question_id

    async def update_question_answer(self, question_id: str, answer: str) -> None:
        record = self._get(question_id)
        record.answer = answer
        record.status = QuestionStatus.ANSWERED
        record.updated_at = datetime.now(timezone.utc)

    async def update_question_status(self, question_id: str, status: QuestionStatus) -> None:
        record = self._get(question_id)
        record.status = status
        record.updated_at = datetime.now(timezone.utc)

    async def list_threads(self, limit: int = 20) -> list[ThreadRecord]:
        threads = sorted(self._threads.values(), key=lambda t: t.created_at, reverse=True)
        return threads[:limit]

    async def get_questions(self, thread_id: str) -> list[QuestionRecord]:
        return [q for q in self._questions.values() if q.thread_id == thread_id]

    def _get(self, question_id: str) -> QuestionRecord:
        try:
            return self._questions[question_id]
        except KeyError:
            raise KeyError(f"Unknown question: {question_id}") from None

    @property
    def backend_type(self) -> str:
        return "memory"

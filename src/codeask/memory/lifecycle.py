"""Thread and question lifecycle.

Owns the in-memory ThreadState and keeps it in step with a ThreadStore.
Hides:
- when the thread is created in the store
- which persisted question the "last question" refers to
- how a failing store call is reflected in memory
"""

import logging
import uuid
from collections.abc import Awaitable

from ..exceptions import LifecycleError, PersistenceError
from .base import ThreadStore
from .models import QuestionDraft, QuestionStatus, ThreadQuestion, ThreadState

logger = logging.getLogger(__name__)


class ThreadManager:
    """Lifecycle manager for one conversation thread.

    The thread moves from uninitialized to active exactly once. Each
    question moves from pending to answered or canceled. Only the last
    question is ever mutated.

    Question mutations are silent no-ops while there is no thread or no
    persisted last question, since they can legitimately race startup.
    """

    def __init__(self, store: ThreadStore):
        self._store = store
        self._thread: ThreadState | None = None
        self._last_question_id: str | None = None

    @property
    def thread(self) -> ThreadState | None:
        """The active thread, or None before initialize_thread()."""
        return self._thread

    @property
    def is_active(self) -> bool:
        return self._thread is not None

    @property
    def last_question_id(self) -> str | None:
        """Store identifier of the last persisted question."""
        return self._last_question_id

    @property
    def store(self) -> ThreadStore:
        return self._store

    async def initialize_thread(self) -> ThreadState:
        """Create the thread in the store once; later calls return it."""
        if self._thread is not None:
            return self._thread

        thread_id = await self._store.create_thread()
        self._thread = ThreadState(id=thread_id)
        logger.info("Started thread %s", thread_id)
        return self._thread

    def add_resources_to_thread(self, resources: list[str]) -> None:
        """Merge resources into the thread's sorted, deduplicated set."""
        if self._thread is None:
            return
        self._thread.resources = sorted(set(self._thread.resources) | set(resources))

    async def add_question_to_thread(
        self,
        prompt: str,
        resources: list[str],
        answer: str = "",
        status: QuestionStatus = QuestionStatus.PENDING,
    ) -> str:
        """Append a question to the thread and persist it.

        Returns:
            The store identifier of the question

        Raises:
            LifecycleError: If the thread was not initialized
            PersistenceError: If the store rejected the question
        """
        thread = self._thread
        if thread is None:
            raise LifecycleError("No thread initialized")

        draft = QuestionDraft(resources=list(resources), prompt=prompt, answer=answer, status=status)
        question = ThreadQuestion(id=str(uuid.uuid4()), **draft.model_dump())
        thread.questions.append(question)

        # A failed persist must not leave the previous question as "last"
        self._last_question_id = None
        question_id = await self._persist(
            "persist_question", question, self._store.persist_question(thread.id, draft)
        )
        self._last_question_id = question_id
        return question_id

    async def update_last_question_answer(self, answer: str) -> None:
        """Set the answer of the last question and persist it."""
        question = self._last_question()
        if question is None:
            return

        question.answer = answer
        question.status = QuestionStatus.ANSWERED
        await self._persist(
            "update_question_answer",
            question,
            self._store.update_question_answer(self._last_question_id, answer),
        )

    async def mark_last_question_canceled(self) -> None:
        """Mark the last question canceled, keeping any answer it has."""
        question = self._last_question()
        if question is None:
            return

        question.status = QuestionStatus.CANCELED
        await self._persist(
            "update_question_status",
            question,
            self._store.update_question_status(self._last_question_id, QuestionStatus.CANCELED),
        )

    def _last_question(self) -> ThreadQuestion | None:
        if self._thread is None or self._last_question_id is None:
            return None
        return self._thread.last_question

    async def _persist(
        self,
        operation: str,
        question: ThreadQuestion,
        call: Awaitable,
    ):
        try:
            return await call
        except Exception as e:
            question.synced = False
            logger.warning("Question %s is not synced: %s failed: %s", question.id, operation, e)
            raise PersistenceError(operation, e) from e

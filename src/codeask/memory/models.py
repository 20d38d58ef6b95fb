"""Data models for threads and their questions.

These models define the structure of a conversation thread and its turns,
independent of the storage backend used.
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QuestionStatus(str, Enum):
    """Lifecycle of one question/answer turn."""

    PENDING = "pending"
    ANSWERED = "answered"
    CANCELED = "canceled"


class QuestionDraft(BaseModel):
    """The persisted fields of a question, before the store assigns an id."""

    resources: list[str] = Field(default_factory=list)
    prompt: str = Field(description="The user's question, mentions removed")
    answer: str = Field(default="", description="The answer text, filled in when the turn ends")
    status: QuestionStatus = QuestionStatus.PENDING


class ThreadQuestion(QuestionDraft):
    """One turn of a thread as held in memory.

    ``synced`` is cleared when a store call for this question failed, so the
    in-memory copy may differ from the persisted one.
    """

    id: str = Field(description="In-memory question identifier")
    synced: bool = True


class ThreadState(BaseModel):
    """In-memory state of the conversation thread."""

    id: str = Field(description="Thread identifier assigned by the store")
    resources: list[str] = Field(default_factory=list, description="Deduplicated, sorted")
    questions: list[ThreadQuestion] = Field(default_factory=list)

    @property
    def last_question(self) -> ThreadQuestion | None:
        return self.questions[-1] if self.questions else None


class QuestionRecord(QuestionDraft):
    """A question row as read back from the store."""

    id: str
    thread_id: str
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class ThreadRecord(BaseModel):
    """A thread row as read back from the store."""

    id: str
    created_at: datetime = Field(default_factory=_utcnow)
    question_count: int = 0

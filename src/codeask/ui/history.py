"""Recall of previously asked questions in the TUI input."""

from collections import deque

from ..config import QUESTION_HISTORY_SIZE


class QuestionHistory:
    """Bounded list of asked questions with a browse cursor.

    While browsing, the text typed before the first step back is kept as a
    draft and restored when stepping forward past the newest question.
    """

    def __init__(self, max_size: int = QUESTION_HISTORY_SIZE):
        self._questions: deque[str] = deque(maxlen=max_size)
        self._cursor: int | None = None
        self._draft = ""

    def __len__(self) -> int:
        return len(self._questions)

    @property
    def browsing(self) -> bool:
        return self._cursor is not None

    def record(self, question: str) -> None:
        """Store a submitted question and stop browsing."""
        if question and (not self._questions or self._questions[-1] != question):
            self._questions.append(question)
        self._cursor = None
        self._draft = ""

    def previous(self, current: str) -> str | None:
        """Step back to an older question.

        Returns:
            The text to show, or None when there is nothing to recall
        """
        if not self._questions:
            return None
        if self._cursor is None:
            self._draft = current
            self._cursor = len(self._questions) - 1
        else:
            self._cursor = max(self._cursor - 1, 0)
        return self._questions[self._cursor]

    def next(self) -> str | None:
        """Step forward; past the newest question the draft comes back."""
        if self._cursor is None:
            return None
        if self._cursor < len(self._questions) - 1:
            self._cursor += 1
            return self._questions[self._cursor]
        self._cursor = None
        return self._draft

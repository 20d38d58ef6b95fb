"""SQLite thread store.

Provides persistent thread storage using a SQLite database file.
Uses aiosqlite for async access.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

import aiosqlite

from .base import ThreadStore
from .models import QuestionDraft, QuestionRecord, QuestionStatus, ThreadRecord


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SQLiteThreadStore(ThreadStore):
    """SQLite-backed thread store.

    Stores threads and questions in a SQLite database file.
    Supports persistent storage across sessions.
    """

    def __init__(self, path: str | Path = "./codeask_threads.db"):
        self._db_path = Path(path).expanduser()
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Initialize database connection and schema."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self._db_path)
        await self._connection.execute("PRAGMA foreign_keys = ON")
        await self._create_schema()

    async def _create_schema(self) -> None:
        """Create database tables."""
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS threads (
                thread_id TEXT PRIMARY KEY,
                created_at TEXT NOT NULL
            )
        """)

        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS questions (
                question_id TEXT PRIMARY KEY,
                thread_id TEXT NOT NULL,
                seq INTEGER NOT NULL,
                prompt TEXT NOT NULL,
                answer TEXT NOT NULL DEFAULT '',
                resources TEXT NOT NULL DEFAULT '[]',
                status TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                FOREIGN KEY (thread_id) REFERENCES threads(thread_id) ON DELETE CASCADE
            )
        """)

        await self._connection.execute("""
            CREATE INDEX IF NOT EXISTS idx_questions_thread
            ON questions(thread_id, seq)
        """)

        await self._connection.commit()

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def create_thread(self) -> str:
        thread_id = str(uuid4())
        await self._connection.execute(
            "INSERT INTO threads (thread_id, created_at) VALUES (?, ?)",
            (thread_id, _now())
        )
        await self._connection.commit()
        return thread_id

    async def persist_question(self, thread_id: str, question: QuestionDraft) -> str:
        async with self._connection.execute(
            "SELECT COALESCE(MAX(seq), 0) + 1 FROM questions WHERE thread_id = ?",
            (thread_id,)
        ) as cursor:
            row = await cursor.fetchone()
            seq = row[0]

        question_id = str(uuid4())
        now = _now()
        await self._connection.execute("""
            INSERT INTO questions
            (question_id, thread_id, seq, prompt, answer, resources, status, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """, (
            question_id,
            thread_id,
            seq,
            question.prompt,
            question.answer,
            json.dumps(question.resources),
            question.status.value,
            now,
            now,
        ))
        await self._connection.commit()
        return question_id

    async def update_question_answer(self, question_id: str, answer: str) -> None:
        await self._update(
            "UPDATE questions SET answer = ?, status = ?, updated_at = ? WHERE question_id = ?",
            (answer, QuestionStatus.ANSWERED.value, _now(), question_id),
            question_id,
        )

    async def update_question_status(self, question_id: str, status: QuestionStatus) -> None:
        await self._update(
            "UPDATE questions SET status = ?, updated_at = ? WHERE question_id = ?",
            (QuestionStatus(status).value, _now(), question_id),
            question_id,
        )

    async def _update(self, sql: str, params: tuple, question_id: str) -> None:
        cursor = await self._connection.execute(sql, params)
        await self._connection.commit()
        if cursor.rowcount == 0:
            raise KeyError(f"Unknown question: {question_id}")

    async def list_threads(self, limit: int = 20) -> list[ThreadRecord]:
        async with self._connection.execute(
            """
            SELECT t.thread_id, t.created_at, COUNT(q.question_id)
            FROM threads t
            LEFT JOIN questions q ON q.thread_id = t.thread_id
            GROUP BY t.thread_id
            ORDER BY t.created_at DESC
            LIMIT ?
            """,
            (limit,)
        ) as cursor:
            rows = await cursor.fetchall()

        return [
            ThreadRecord(
                id=thread_id,
                created_at=datetime.fromisoformat(created_at),
                question_count=count,
            )
            for thread_id, created_at, count in rows
        ]

    async def get_questions(self, thread_id: str) -> list[QuestionRecord]:
        async with self._connection.execute(
            """
            SELECT question_id, prompt, answer, resources, status, created_at, updated_at
            FROM questions
            WHERE thread_id = ?
            ORDER BY seq ASC
            """,
            (thread_id,)
        ) as cursor:
            rows = await cursor.fetchall()

        records = []
        for row in rows:
            question_id, prompt, answer, resources_json, status, created_at, updated_at = row
            records.append(QuestionRecord(
                id=question_id,
                thread_id=thread_id,
                prompt=prompt,
                answer=answer,
                resources=json.loads(resources_json),
                status=QuestionStatus(status),
                created_at=datetime.fromisoformat(created_at),
                updated_at=datetime.fromisoformat(updated_at),
            ))

        return records

    @property
    def backend_type(self) -> str:
        return "sqlite"

    @property
    def db_path(self) -> Path:
        return self._db_path

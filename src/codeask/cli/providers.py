"""Provider factory functions for CLI.

Centralizes creation of the answer client and thread store from
environment variables. Hides configuration details from command
implementations.
"""

import os

from ..client import HttpAnswerClient
from ..config import (
    DEFAULT_MEMORY_BACKEND,
    DEFAULT_SERVER_URL,
    DEFAULT_SQLITE_PATH,
    DEFAULT_TIMEOUT_SECONDS,
    ENV_MEMORY_BACKEND,
    ENV_MEMORY_PATH,
    ENV_SERVER_URL,
    ENV_TIMEOUT,
)
from ..memory import ThreadStore, create_thread_store


def get_client(server_url: str | None = None) -> HttpAnswerClient:
    """Create the answer server client.

    Args:
        server_url: Explicit server URL, overriding the environment

    Environment variables:
        CODEASK_SERVER_URL: Answer server URL (default: http://localhost:8080)
        CODEASK_TIMEOUT: Read timeout in seconds (default: 60)
    """
    return HttpAnswerClient(
        base_url=server_url or os.getenv(ENV_SERVER_URL, DEFAULT_SERVER_URL),
        timeout=float(os.getenv(ENV_TIMEOUT, str(DEFAULT_TIMEOUT_SECONDS))),
    )


def get_store(backend: str | None = None, path: str | None = None) -> ThreadStore:
    """Create the thread store.

    Args:
        backend: "memory" or "sqlite", overriding the environment
        path: SQLite database path, overriding the environment

    Environment variables:
        CODEASK_MEMORY: Store backend (memory, sqlite; default: memory)
        CODEASK_MEMORY_PATH: SQLite file (default: ~/.codeask/threads.db)
    """
    backend = backend or os.getenv(ENV_MEMORY_BACKEND, DEFAULT_MEMORY_BACKEND)
    if backend == "sqlite":
        return create_thread_store(
            "sqlite",
            path=path or os.getenv(ENV_MEMORY_PATH, DEFAULT_SQLITE_PATH),
        )
    return create_thread_store(backend)

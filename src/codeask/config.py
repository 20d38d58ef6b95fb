"""Configuration constants.

Centralizes defaults and environment variable names used across modules.
"""

# Answer server
DEFAULT_SERVER_URL = "http://localhost:8080"
DEFAULT_TIMEOUT_SECONDS = 60.0  # Read timeout for streaming responses

# Environment variable names
ENV_SERVER_URL = "CODEASK_SERVER_URL"
ENV_TIMEOUT = "CODEASK_TIMEOUT"
ENV_MEMORY_BACKEND = "CODEASK_MEMORY"
ENV_MEMORY_PATH = "CODEASK_MEMORY_PATH"
ENV_LOG_LEVEL = "CODEASK_LOG_LEVEL"

# Thread store
DEFAULT_MEMORY_BACKEND = "memory"
DEFAULT_SQLITE_PATH = "~/.codeask/threads.db"

# Transcript
WELCOME_MESSAGE = (
    "Welcome to codeask! Ask anything about the library/framework "
    "you're interested in (make sure you @ it first)"
)

# Output truncation limits
MAX_ANSWER_PREVIEW = 80  # Characters shown per answer in thread listings

# Input
QUESTION_HISTORY_SIZE = 100  # Questions kept for Up/Down recall in the TUI

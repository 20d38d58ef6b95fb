"""Exception hierarchy for codeask.

Each error kind maps to a distinct way the caller must react:
- EmptyResourceSetError: fatal to the current command, no stream is opened
- StreamTransportError: the answer server refused or broke the stream
- LifecycleError: a question was added before the thread existed
- PersistenceError: the thread store rejected a call
"""


class CodeaskError(Exception):
    """Base class for all codeask errors."""


class EmptyResourceSetError(CodeaskError):
    """No resources were named and the registry has none configured."""

    def __init__(self, message: str = "No resources configured.") -> None:
        super().__init__(message)


class StreamTransportError(CodeaskError):
    """The streaming request could not be opened or read."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class LifecycleError(CodeaskError):
    """A thread operation was called in a state that does not allow it."""


class PersistenceError(CodeaskError):
    """A thread store call failed after the in-memory state was updated."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause

"""Exception hierarchy for the chunked review pipeline.

Every splitter, skill and workflow raises from this tree so callers can
tell structural, permanent-upstream and per-chunk failures apart without
string-matching.
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all application-layer errors."""

    def __init__(self, message: str = "", *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}


class DiffParseError(ApplicationError):
    """Raised when a diff cannot be interpreted structurally."""


class MalformedHunkHeaderError(DiffParseError):
    """A line opens a hunk (``@@``) but carries no explicit new-file start.

    Guessing a start line would mis-validate every later line of the file,
    so the whole parse is rejected instead.
    """

    def __init__(self, line: str, *, line_number: int, path: str | None = None) -> None:
        super().__init__(
            f"Malformed hunk header at diff line {line_number}: {line!r}",
            context={"line_number": line_number, "path": path},
        )
        self.line = line
        self.line_number = line_number
        self.path = path


class SkillExecutionError(ApplicationError):
    """Raised when a Skill.execute() call fails."""


class ResponseParseError(SkillExecutionError):
    """The engine answered, but not with a usable review object.

    Permanent: retrying would reproduce the same malformed output.
    """


class RetryExhaustedError(SkillExecutionError):
    """A transient failure persisted past the retry ceiling."""

    def __init__(self, operation: str, attempts: int, last_error: BaseException) -> None:
        super().__init__(
            f"max retries exceeded for {operation} after {attempts} attempt(s): {last_error}",
            context={"operation": operation, "attempts": attempts},
        )
        self.operation = operation
        self.attempts = attempts
        self.last_error = last_error


class WorkflowExecutionError(ApplicationError):
    """Raised when the review pipeline fails at any step."""


class ChunkReviewError(WorkflowExecutionError):
    """A single chunk failed and aborted the whole chunked review."""

    def __init__(self, chunk_index: int, chunk_total: int, reason: BaseException) -> None:
        super().__init__(
            f"chunk {chunk_index + 1} of {chunk_total} failed: {reason}",
            context={
                "chunk_index": chunk_index,
                "chunk_total": chunk_total,
                "error_type": type(reason).__name__,
            },
        )
        self.chunk_index = chunk_index
        self.chunk_total = chunk_total
        self.reason = reason

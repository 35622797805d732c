from chunked_code_review.core.application.exceptions.review_exceptions import (
    ApplicationError,
    ChunkReviewError,
    DiffParseError,
    MalformedHunkHeaderError,
    ResponseParseError,
    RetryExhaustedError,
    SkillExecutionError,
    WorkflowExecutionError,
)

__all__ = [
    "ApplicationError",
    "ChunkReviewError",
    "DiffParseError",
    "MalformedHunkHeaderError",
    "ResponseParseError",
    "RetryExhaustedError",
    "SkillExecutionError",
    "WorkflowExecutionError",
]

from dataclasses import dataclass, field

from chunked_code_review.core.domain.quality.value_objects.review_severity import ReviewSeverity


@dataclass(frozen=True)
class ReviewComment:
    """Guardrail: a comment must target a real file and a positive new-file line."""

    path: str
    line: int
    body: str
    severity: ReviewSeverity = field(default_factory=ReviewSeverity.default)

    def __post_init__(self) -> None:
        if not self.path.strip():
            raise ValueError("Comment path must not be empty.")
        if self.line <= 0:
            raise ValueError(f"Comment line must be positive, got {self.line}.")
        if not self.body.strip():
            raise ValueError("Comment body must not be empty.")

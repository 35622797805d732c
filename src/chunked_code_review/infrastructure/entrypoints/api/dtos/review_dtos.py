from pydantic import BaseModel, ConfigDict, Field

from chunked_code_review.core.application.skills.review.severity_rules import (
    format_comment_with_severity,
    has_unresolved_blockers,
)
from chunked_code_review.core.domain.quality import MergedReview, ReviewComment


class ReviewRequestDTO(BaseModel):
    """Inbound review request: a unified diff plus pull request metadata."""

    model_config = ConfigDict(extra="ignore")

    diff: str
    title: str = ""
    description: str = ""


class ReviewCommentDTO(BaseModel):
    path: str
    line: int
    body: str
    severity: str
    formatted_body: str

    @classmethod
    def from_domain(cls, comment: ReviewComment) -> "ReviewCommentDTO":
        """``formatted_body`` carries the severity badge used when posting inline."""
        return cls(
            path=comment.path,
            line=comment.line,
            body=comment.body,
            severity=comment.severity.value,
            formatted_body=format_comment_with_severity(comment.body, comment.severity),
        )


class TokenUsageDTO(BaseModel):
    input_tokens: int = 0
    output_tokens: int = 0


class MergedReviewDTO(BaseModel):
    summary: str
    approval: str
    comments: list[ReviewCommentDTO] = Field(default_factory=list)
    filtered_comments: int = 0
    chunks: int = 0
    has_blockers: bool = False
    usage: TokenUsageDTO = Field(default_factory=TokenUsageDTO)

    @classmethod
    def from_domain(cls, review: MergedReview) -> "MergedReviewDTO":
        return cls(
            summary=review.summary,
            approval=review.approval.value,
            comments=[ReviewCommentDTO.from_domain(c) for c in review.comments],
            filtered_comments=review.filtered_count,
            chunks=review.chunk_count,
            has_blockers=has_unresolved_blockers(review.comments),
            usage=TokenUsageDTO(
                input_tokens=review.usage.input_tokens,
                output_tokens=review.usage.output_tokens,
            ),
        )

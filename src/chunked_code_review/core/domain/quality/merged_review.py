from dataclasses import dataclass, field

from chunked_code_review.core.domain.quality.value_objects.review_approval import ReviewApproval
from chunked_code_review.core.domain.quality.value_objects.review_comment import ReviewComment
from chunked_code_review.core.domain.quality.value_objects.token_usage import TokenUsage


@dataclass(frozen=True)
class MergedReview:
    """Single terminal verdict handed to whoever posts the review.

    ``chunk_count`` is 0 when the diff was reviewed in a single call.
    """

    summary: str
    comments: list[ReviewComment] = field(default_factory=list)
    approval: ReviewApproval = ReviewApproval.COMMENT
    usage: TokenUsage = field(default_factory=TokenUsage)
    filtered_count: int = 0
    chunk_count: int = 0

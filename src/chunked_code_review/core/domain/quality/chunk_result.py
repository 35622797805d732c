from dataclasses import dataclass, field

from chunked_code_review.core.domain.quality.value_objects.review_approval import ReviewApproval
from chunked_code_review.core.domain.quality.value_objects.review_comment import ReviewComment
from chunked_code_review.core.domain.quality.value_objects.token_usage import TokenUsage


@dataclass(frozen=True)
class ChunkResult:
    """Validated outcome of reviewing one chunk (or the whole diff, when not chunking).

    ``comments`` only holds comments whose line exists in the chunk's
    ``LineValidityMap``; ``filtered_count`` records how many were dropped.
    """

    index: int
    summary: str
    comments: list[ReviewComment] = field(default_factory=list)
    approval: ReviewApproval = ReviewApproval.COMMENT
    filtered_count: int = 0
    usage: TokenUsage = field(default_factory=TokenUsage)

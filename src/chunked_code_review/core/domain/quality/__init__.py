from chunked_code_review.core.domain.quality.chunk_result import ChunkResult
from chunked_code_review.core.domain.quality.merged_review import MergedReview
from chunked_code_review.core.domain.quality.value_objects.review_approval import ReviewApproval
from chunked_code_review.core.domain.quality.value_objects.review_comment import ReviewComment
from chunked_code_review.core.domain.quality.value_objects.review_severity import ReviewSeverity
from chunked_code_review.core.domain.quality.value_objects.token_usage import TokenUsage

__all__ = [
    "ChunkResult",
    "MergedReview",
    "ReviewApproval",
    "ReviewComment",
    "ReviewSeverity",
    "TokenUsage",
]

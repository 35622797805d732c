"""Helpers that derive verdicts and badges from comment severities."""

from collections.abc import Iterable

from chunked_code_review.core.domain.quality import ReviewApproval, ReviewComment, ReviewSeverity


def determine_approval_from_severity(comments: Iterable[ReviewComment]) -> ReviewApproval:
    """Blockers request changes, suggestions leave a comment, nitpicks alone still approve."""
    severities = {c.severity for c in comments}
    if ReviewSeverity.BLOCKER in severities:
        return ReviewApproval.REQUEST_CHANGES
    if ReviewSeverity.SUGGESTION in severities:
        return ReviewApproval.COMMENT
    return ReviewApproval.APPROVE


def has_unresolved_blockers(comments: Iterable[ReviewComment]) -> bool:
    return any(c.severity is ReviewSeverity.BLOCKER for c in comments)


def format_comment_with_severity(body: str, severity: ReviewSeverity) -> str:
    if severity is ReviewSeverity.BLOCKER:
        return f"**[blocker]** {body}"
    if severity is ReviewSeverity.NITPICK:
        return f"*[nitpick]* {body}"
    return body

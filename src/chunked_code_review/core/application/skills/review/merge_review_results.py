"""Combine per-chunk review results into one verdict.

Approval is strictest-wins (``request_changes > comment > approve``); comments
keep ascending chunk order; summaries are labelled per part.
"""

from collections.abc import Iterable

from chunked_code_review.core.domain.quality import (
    ChunkResult,
    MergedReview,
    ReviewApproval,
    ReviewComment,
    TokenUsage,
)

NOTHING_TO_REVIEW_SUMMARY = "No chunks to review."


def merge_chunk_results(results: Iterable[ChunkResult | None]) -> MergedReview:
    """Merge whatever results are present; gaps (``None``) are skipped.

    Callers needing all-or-nothing semantics must reject missing chunks
    before calling this.
    """
    present = sorted((r for r in results if r is not None), key=lambda r: r.index)
    if not present:
        return MergedReview(summary=NOTHING_TO_REVIEW_SUMMARY, approval=ReviewApproval.COMMENT)

    comments: list[ReviewComment] = []
    approval = ReviewApproval.APPROVE
    usage = TokenUsage()
    for result in present:
        comments.extend(result.comments)
        approval = ReviewApproval.strictest(approval, result.approval)
        usage = usage + result.usage

    return MergedReview(
        summary=build_merged_summary(present),
        comments=comments,
        approval=approval,
        usage=usage,
        filtered_count=sum(r.filtered_count for r in present),
        chunk_count=len(present),
    )


def build_merged_summary(results: list[ChunkResult]) -> str:
    if len(results) == 1:
        return results[0].summary
    summaries = [r.summary for r in results if r.summary]
    if len(summaries) <= 1:
        return summaries[0] if summaries else ""
    parts = [f"**Part {number}:** {summary}" for number, summary in enumerate(summaries, start=1)]
    header = f"**Reviewed {_pluralize(len(results), 'file group')}:**"
    return "\n\n".join([header, *parts])


def _pluralize(count: int, singular: str) -> str:
    return f"{count} {singular}" if count == 1 else f"{count} {singular}s"

from collections.abc import Sequence

import structlog

from chunked_code_review.core.domain.diff import LineValidityMap
from chunked_code_review.core.domain.quality import ReviewComment

logger = structlog.get_logger()

_BODY_PREVIEW_LENGTH = 50


def filter_valid_comments(
    comments: Sequence[ReviewComment], line_map: LineValidityMap
) -> tuple[list[ReviewComment], int]:
    """Keep comments that target a commentable line; return them and the drop count.

    Engines often hallucinate line numbers. A dropped comment is safer than one
    posted on the wrong line, so invalid targets are logged, never raised.
    """
    valid: list[ReviewComment] = []
    filtered = 0
    for comment in comments:
        if line_map.is_valid_comment_line(comment.path, comment.line):
            valid.append(comment)
            continue
        filtered += 1
        logger.warning(
            "Filtered comment with invalid line number",
            path=comment.path,
            line=comment.line,
            body_preview=_truncate(comment.body, _BODY_PREVIEW_LENGTH),
        )
    return valid, filtered


def _truncate(text: str, max_len: int) -> str:
    return text if len(text) <= max_len else text[:max_len] + "..."

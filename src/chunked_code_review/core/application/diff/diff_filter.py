"""Drop whole file sections from a diff when their path matches an exclude glob."""

import fnmatch
import posixpath
from collections.abc import Sequence

from chunked_code_review.core.application.diff.diff_splitter import split_diff_by_file


def should_exclude_file(path: str, patterns: Sequence[str]) -> bool:
    """Return True when *path* matches any of *patterns*.

    Patterns are matched against the full path and against the basename, so
    ``vendor/**``, ``src/*.pb.go`` and ``*.gen.go`` all behave as expected.
    ``*`` crosses directory separators.
    """
    return any(_matches(path, pattern) for pattern in patterns)


def filter_diff(diff: str, patterns: Sequence[str]) -> str:
    """Return *diff* without the file sections excluded by *patterns*."""
    if not patterns or not diff:
        return diff
    kept = [
        segment.content
        for segment in split_diff_by_file(diff)
        if not should_exclude_file(segment.path, patterns)
    ]
    return "\n".join(kept)


def _matches(path: str, pattern: str) -> bool:
    candidates = [pattern]
    if pattern.startswith("**/"):
        # "**/" also matches zero directories.
        candidates.append(pattern[3:])
    basename = posixpath.basename(path)
    return any(
        fnmatch.fnmatchcase(path, candidate) or fnmatch.fnmatchcase(basename, candidate)
        for candidate in candidates
    )

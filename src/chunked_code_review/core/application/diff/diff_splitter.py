"""Pure functions for splitting a unified diff into per-file sections."""

from chunked_code_review.core.domain.diff import UNKNOWN_PATH, FileDiffSegment

FILE_MARKER = "diff --git"


def split_diff_by_file(diff: str) -> list[FileDiffSegment]:
    """Split *diff* at every ``diff --git`` marker, preserving file order.

    Each segment holds its marker line and every following line verbatim up to
    the next marker. Rejoining the segments with ``"\\n"`` reproduces the input,
    minus any preamble that precedes the first marker.
    """
    if not diff:
        return []
    segments: list[FileDiffSegment] = []
    path: str | None = None
    buffer: list[str] = []
    for line in diff.split("\n"):
        if line.startswith(FILE_MARKER):
            if path is not None:
                segments.append(FileDiffSegment(path=path, content="\n".join(buffer)))
            path = extract_path_from_marker(line)
            buffer = []
        if path is not None:
            buffer.append(line)
    if path is not None:
        segments.append(FileDiffSegment(path=path, content="\n".join(buffer)))
    return segments


def extract_path_from_marker(line: str) -> str:
    """Return the post-change path of a ``diff --git a/<path> b/<path>`` line."""
    tokens = line.split()
    if len(tokens) < 4:
        return UNKNOWN_PATH
    return tokens[3].removeprefix("b/")

"""Map unified diff lines to new-file line numbers.

One walker drives both outputs: the ``LineValidityMap`` used to reject
comments on lines that do not exist in the new file, and the annotated
rendering that shows the review engine which number to use for each line.

Walk rules, per line:

* ``diff --git`` forces the walker out of any hunk.
* ``+++ b/<path>`` selects the current file; ``+++ /dev/null`` clears it.
* ``@@ -a[,b] +c[,d] @@`` enters a hunk with the cursor at ``c``.
* Inside a hunk of a known file, ``+``, `` `` and blank lines exist in the
  new file at the cursor, which then advances; ``-`` lines do not and leave
  the cursor alone; ``\\`` markers pass through untouched.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass, replace
from enum import Enum

from chunked_code_review.core.application.diff.diff_splitter import FILE_MARKER
from chunked_code_review.core.application.exceptions import MalformedHunkHeaderError
from chunked_code_review.core.domain.diff import LineValidityMap

HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")

_NEW_FILE_PREFIX = "+++ b/"
_DELETED_FILE_MARKER = "+++ /dev/null"
_HUNK_PREFIX = "@@"
_NO_NEWLINE_PREFIX = "\\"
_DELETED_LINE_GUTTER = "      | "


class HunkState(Enum):
    OUTSIDE_HUNK = "outside_hunk"
    INSIDE_HUNK = "inside_hunk"


@dataclass(frozen=True)
class _WalkState:
    """Position of the walker; replaced, never mutated, on every line."""

    path: str | None = None
    hunk: HunkState = HunkState.OUTSIDE_HUNK
    cursor: int = 0


@dataclass(frozen=True)
class MappedLine:
    """One diff line together with what the walker learned about it."""

    text: str
    path: str | None = None
    new_line: int | None = None
    deleted: bool = False
    opens_file: bool = False


def parse_diff_lines(diff: str) -> LineValidityMap:
    """Return the commentable new-file line numbers of every file in *diff*."""
    lines_by_path: dict[str, set[int]] = {}
    for mapped in walk_diff(diff):
        if mapped.opens_file and mapped.path is not None:
            lines_by_path.setdefault(mapped.path, set())
        if mapped.new_line is not None and mapped.path is not None:
            lines_by_path.setdefault(mapped.path, set()).add(mapped.new_line)
    return LineValidityMap(lines_by_path)


def annotate_diff_with_line_numbers(diff: str) -> str:
    """Prefix every hunk body line with its new-file line number.

    Context and added lines get ``"NNNNN | "``; deleted lines get a blank
    gutter since they cannot be commented on. Everything else is unchanged.
    """
    rendered = [_render(mapped) for mapped in walk_diff(diff)]
    trailer = "\n" if diff.endswith("\n") else ""
    return "\n".join(rendered) + trailer


def walk_diff(diff: str) -> Iterator[MappedLine]:
    """Yield a ``MappedLine`` for every line of *diff* in order."""
    state = _WalkState()
    for number, line in enumerate(_split_lines(diff), start=1):
        state, mapped = _step(state, line, number)
        yield mapped


def _split_lines(diff: str) -> list[str]:
    """Split on newlines; a single trailing newline does not start a blank line."""
    if not diff:
        return []
    lines = diff.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _step(state: _WalkState, line: str, number: int) -> tuple[_WalkState, MappedLine]:
    if line.startswith(FILE_MARKER):
        return replace(state, hunk=HunkState.OUTSIDE_HUNK), MappedLine(line)
    if line.startswith(_NEW_FILE_PREFIX):
        path = line.removeprefix(_NEW_FILE_PREFIX)
        return _WalkState(path=path), MappedLine(line, path=path, opens_file=True)
    if line.startswith(_DELETED_FILE_MARKER):
        return _WalkState(), MappedLine(line)
    if line.startswith(_HUNK_PREFIX):
        return _enter_hunk(state, line, number), MappedLine(line, path=state.path)
    if state.hunk is HunkState.OUTSIDE_HUNK:
        return state, MappedLine(line, path=state.path)
    return _step_hunk_body(state, line)


def _enter_hunk(state: _WalkState, line: str, number: int) -> _WalkState:
    match = HUNK_HEADER_RE.match(line)
    if match is None:
        raise MalformedHunkHeaderError(line, line_number=number, path=state.path)
    return replace(state, hunk=HunkState.INSIDE_HUNK, cursor=int(match.group(3)))


def _step_hunk_body(state: _WalkState, line: str) -> tuple[_WalkState, MappedLine]:
    if line.startswith("-"):
        return state, MappedLine(line, path=state.path, deleted=True)
    if line.startswith(_NO_NEWLINE_PREFIX) or state.path is None:
        # Nothing in a deleted file's hunk exists in the new file.
        return state, MappedLine(line, path=state.path)
    # Added, context (" ") and blank lines all exist in the new file.
    mapped = MappedLine(line, path=state.path, new_line=state.cursor)
    return replace(state, cursor=state.cursor + 1), mapped


def _render(mapped: MappedLine) -> str:
    if mapped.new_line is not None:
        return f"{mapped.new_line:5d} | {mapped.text}"
    if mapped.deleted:
        return _DELETED_LINE_GUTTER + mapped.text
    return mapped.text

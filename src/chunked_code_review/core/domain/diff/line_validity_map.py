"""Lookup of commentable new-file line numbers per file path."""

from collections.abc import Iterator, Mapping
from types import MappingProxyType


class LineValidityMap(Mapping[str, frozenset[int]]):
    """Read-only mapping ``path -> {valid new-file line numbers}``.

    A line is commentable only if it is a context or added line inside a hunk,
    i.e. it exists in the post-change version of the file.
    """

    def __init__(self, lines_by_path: Mapping[str, frozenset[int] | set[int]] | None = None) -> None:
        frozen = {path: frozenset(lines) for path, lines in (lines_by_path or {}).items()}
        self._lines: Mapping[str, frozenset[int]] = MappingProxyType(frozen)

    def __getitem__(self, path: str) -> frozenset[int]:
        return self._lines[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __repr__(self) -> str:
        counts = {path: len(lines) for path, lines in self._lines.items()}
        return f"LineValidityMap({counts})"

    def is_valid_comment_line(self, path: str, line: int) -> bool:
        return line in self._lines.get(path, frozenset())

"""Size-bounded group of whole file diffs dispatched together to the review engine."""

from dataclasses import dataclass

from chunked_code_review.core.domain.diff.value_objects.file_diff_segment import FileDiffSegment


@dataclass(frozen=True)
class Chunk:
    """A packed group of file segments.

    ``index`` is the 0-based position among sibling chunks and ``total`` the
    final chunk count; both are assigned once packing is complete.
    """

    files: tuple[FileDiffSegment, ...]
    size_bytes: int
    index: int
    total: int

    def __post_init__(self) -> None:
        if not self.files:
            raise ValueError("A chunk must contain at least one file.")
        if not 0 <= self.index < self.total:
            raise ValueError(f"Chunk index {self.index} out of range for total {self.total}.")

    @property
    def file_paths(self) -> list[str]:
        return [f.path for f in self.files]

    @property
    def number(self) -> int:
        """1-based position, as shown to humans and to the review engine."""
        return self.index + 1

    def to_diff(self) -> str:
        """Rejoin member file sections into one unified diff."""
        return "\n".join(f.content for f in self.files)

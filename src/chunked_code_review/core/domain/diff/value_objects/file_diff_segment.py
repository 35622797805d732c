"""One file's complete section of a unified diff."""

from dataclasses import dataclass

UNKNOWN_PATH = "unknown"


@dataclass(frozen=True)
class FileDiffSegment:
    """All hunks of a single file, starting with its ``diff --git`` marker line."""

    path: str
    content: str

    @property
    def size_bytes(self) -> int:
        return len(self.content.encode("utf-8"))

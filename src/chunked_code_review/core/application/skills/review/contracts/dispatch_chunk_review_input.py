from dataclasses import dataclass

from chunked_code_review.core.domain.diff import Chunk


@dataclass(frozen=True)
class DispatchChunkReviewInput:
    """Input contract for reviewing one diff excerpt.

    With ``chunk`` unset the excerpt is the whole diff and no chunk framing is
    added to the prompt.
    """

    title: str
    description: str
    diff: str
    chunk: Chunk | None = None

    @property
    def index(self) -> int:
        return self.chunk.index if self.chunk else 0

    @property
    def label(self) -> str:
        if self.chunk is None:
            return "full_diff"
        return f"chunk_{self.chunk.number}_of_{self.chunk.total}"

    @classmethod
    def for_chunk(cls, title: str, description: str, chunk: Chunk) -> "DispatchChunkReviewInput":
        return cls(title=title, description=description, diff=chunk.to_diff(), chunk=chunk)

"""Greedy, order-preserving bin-packing of file diffs into size-bounded chunks."""

from collections.abc import Sequence

from chunked_code_review.core.application.diff.diff_splitter import split_diff_by_file
from chunked_code_review.core.domain.diff import Chunk, FileDiffSegment


def pack_chunks(files: Sequence[FileDiffSegment], max_chunk_bytes: int) -> list[Chunk]:
    """Pack *files* into chunks of at most *max_chunk_bytes*, in a single pass.

    A file larger than the limit on its own becomes a singleton chunk; it is
    the only case where a chunk may exceed the limit. No input, no chunks.
    """
    if max_chunk_bytes <= 0:
        raise ValueError(f"max_chunk_bytes must be positive, got {max_chunk_bytes}")

    groups: list[list[FileDiffSegment]] = []
    current: list[FileDiffSegment] = []
    current_size = 0
    for file in files:
        size = file.size_bytes
        if size > max_chunk_bytes:
            if current:
                groups.append(current)
                current, current_size = [], 0
            groups.append([file])
            continue
        if current and current_size + size > max_chunk_bytes:
            groups.append(current)
            current, current_size = [], 0
        current.append(file)
        current_size += size
    if current:
        groups.append(current)

    total = len(groups)
    return [
        Chunk(
            files=tuple(group),
            size_bytes=sum(f.size_bytes for f in group),
            index=index,
            total=total,
        )
        for index, group in enumerate(groups)
    ]


def chunk_diff(diff: str, max_chunk_bytes: int) -> list[Chunk]:
    """Split *diff* by file and pack the result."""
    return pack_chunks(split_diff_by_file(diff), max_chunk_bytes)

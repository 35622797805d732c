"""Unit tests — pack_chunks / chunk_diff."""

import pytest

from chunked_code_review.core.application.diff.chunk_packer import chunk_diff, pack_chunks
from chunked_code_review.core.domain.diff import FileDiffSegment


def _three_file_diff() -> str:
    return "".join(f"diff --git a/f{n}.go b/f{n}.go\n" + "x" * 70 + "\n" for n in (1, 2, 3))


def _segment(path: str, size: int) -> FileDiffSegment:
    return FileDiffSegment(path=path, content="y" * size)


class TestChunkDiff:
    def test_three_files_pack_into_two_chunks(self) -> None:
        chunks = chunk_diff(_three_file_diff(), 200)

        assert len(chunks) == 2
        assert chunks[0].file_paths == ["f1.go", "f2.go"]
        assert chunks[1].file_paths == ["f3.go"]

    def test_every_chunk_knows_index_and_total(self) -> None:
        chunks = chunk_diff(_three_file_diff(), 200)

        assert [(c.index, c.total) for c in chunks] == [(0, 2), (1, 2)]

    def test_large_limit_yields_single_chunk(self) -> None:
        chunks = chunk_diff(_three_file_diff(), 10_000)

        assert len(chunks) == 1
        assert chunks[0].to_diff() == _three_file_diff()

    def test_empty_diff_yields_no_chunks(self) -> None:
        assert chunk_diff("", 100) == []

    def test_chunk_to_diff_rejoins_member_files(self) -> None:
        diff = _three_file_diff()
        chunks = chunk_diff(diff, 200)

        assert "\n".join(c.to_diff() for c in chunks) == diff


class TestPackChunks:
    def test_oversized_file_becomes_singleton_chunk(self) -> None:
        files = [_segment("a", 10), _segment("huge", 500), _segment("b", 10)]

        chunks = pack_chunks(files, 100)

        assert [c.file_paths for c in chunks] == [["a"], ["huge"], ["b"]]
        assert chunks[1].size_bytes == 500

    def test_chunks_respect_limit_except_singletons(self) -> None:
        files = [_segment(f"f{i}", size) for i, size in enumerate([40, 40, 30, 90, 10, 60])]

        chunks = pack_chunks(files, 100)

        for chunk in chunks:
            assert chunk.size_bytes <= 100 or len(chunk.files) == 1

    def test_file_order_is_preserved(self) -> None:
        files = [_segment(f"f{i}", 30) for i in range(7)]

        chunks = pack_chunks(files, 100)

        assert [p for c in chunks for p in c.file_paths] == [f"f{i}" for i in range(7)]

    def test_greedy_packing_does_not_reorder_to_fill_gaps(self) -> None:
        files = [_segment("a", 60), _segment("b", 60), _segment("c", 30)]

        chunks = pack_chunks(files, 100)

        assert [c.file_paths for c in chunks] == [["a"], ["b", "c"]]

    def test_exact_fit_stays_in_one_chunk(self) -> None:
        chunks = pack_chunks([_segment("a", 50), _segment("b", 50)], 100)

        assert len(chunks) == 1

    def test_no_files_yields_no_chunks(self) -> None:
        assert pack_chunks([], 100) == []

    def test_rejects_non_positive_limit(self) -> None:
        with pytest.raises(ValueError):
            pack_chunks([_segment("a", 1)], 0)

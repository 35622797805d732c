"""Unit tests — split_diff_by_file (pure function, zero I/O)."""

from chunked_code_review.core.application.diff.diff_splitter import (
    extract_path_from_marker,
    split_diff_by_file,
)
from chunked_code_review.core.domain.diff import UNKNOWN_PATH

TWO_FILE_DIFF = (
    "diff --git a/src/a.py b/src/a.py\n"
    "--- a/src/a.py\n"
    "+++ b/src/a.py\n"
    "@@ -1,1 +1,2 @@\n"
    " import os\n"
    "+import sys\n"
    "diff --git a/src/b.py b/src/b.py\n"
    "--- a/src/b.py\n"
    "+++ b/src/b.py\n"
    "@@ -3,1 +3,1 @@\n"
    "-x = 1\n"
    "+x = 2\n"
)


class TestSplitDiffByFile:
    def test_splits_in_file_order(self) -> None:
        segments = split_diff_by_file(TWO_FILE_DIFF)

        assert [s.path for s in segments] == ["src/a.py", "src/b.py"]
        assert segments[0].content.startswith("diff --git a/src/a.py b/src/a.py")
        assert segments[1].content.startswith("diff --git a/src/b.py b/src/b.py")

    def test_segment_does_not_keep_trailing_newline_before_next_marker(self) -> None:
        first = split_diff_by_file(TWO_FILE_DIFF)[0]

        assert first.content.endswith("+import sys")

    def test_rejoining_segments_reproduces_input(self) -> None:
        segments = split_diff_by_file(TWO_FILE_DIFF)

        assert "\n".join(s.content for s in segments) == TWO_FILE_DIFF

    def test_empty_input_yields_no_segments(self) -> None:
        assert split_diff_by_file("") == []

    def test_text_without_marker_yields_no_segments(self) -> None:
        assert split_diff_by_file("just some text\nwith lines\n") == []

    def test_preamble_before_first_marker_is_dropped(self) -> None:
        segments = split_diff_by_file("From: someone\nSubject: x\n" + TWO_FILE_DIFF)

        assert len(segments) == 2
        assert "From: someone" not in segments[0].content

    def test_malformed_marker_gets_unknown_path(self) -> None:
        segments = split_diff_by_file("diff --git broken\n+line\n")

        assert segments[0].path == UNKNOWN_PATH
        assert segments[0].content == "diff --git broken\n+line\n"

    def test_size_bytes_counts_utf8(self) -> None:
        segment = split_diff_by_file("diff --git a/ñ b/ñ\n+é")[0]

        assert segment.size_bytes == len("diff --git a/ñ b/ñ\n+é".encode())


class TestExtractPathFromMarker:
    def test_strips_b_prefix(self) -> None:
        assert extract_path_from_marker("diff --git a/old/name.go b/new/name.go") == "new/name.go"

    def test_too_few_tokens(self) -> None:
        assert extract_path_from_marker("diff --git a/x") == UNKNOWN_PATH

from chunked_code_review.core.application.diff.chunk_packer import chunk_diff, pack_chunks
from chunked_code_review.core.application.diff.diff_filter import filter_diff, should_exclude_file
from chunked_code_review.core.application.diff.diff_info_parser import parse_diff_info
from chunked_code_review.core.application.diff.diff_splitter import split_diff_by_file
from chunked_code_review.core.application.diff.line_mapper import (
    annotate_diff_with_line_numbers,
    parse_diff_lines,
)

__all__ = [
    "annotate_diff_with_line_numbers",
    "chunk_diff",
    "filter_diff",
    "pack_chunks",
    "parse_diff_info",
    "parse_diff_lines",
    "should_exclude_file",
    "split_diff_by_file",
]

from chunked_code_review.core.domain.diff.chunk import Chunk
from chunked_code_review.core.domain.diff.line_validity_map import LineValidityMap
from chunked_code_review.core.domain.diff.value_objects.diff_info import DiffInfo
from chunked_code_review.core.domain.diff.value_objects.file_diff_segment import (
    UNKNOWN_PATH,
    FileDiffSegment,
)

__all__ = ["Chunk", "DiffInfo", "FileDiffSegment", "LineValidityMap", "UNKNOWN_PATH"]

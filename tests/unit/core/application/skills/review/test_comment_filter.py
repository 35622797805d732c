from chunked_code_review.core.application.skills.review.comment_filter import (
    filter_valid_comments,
)
from chunked_code_review.core.domain.diff import LineValidityMap
from chunked_code_review.core.domain.quality import ReviewComment


class TestFilterValidComments:
    def test_drops_and_counts_invalid_lines(self) -> None:
        line_map = LineValidityMap({"main.go": {10, 11, 12}})
        comments = [
            ReviewComment(path="main.go", line=10, body="first"),
            ReviewComment(path="main.go", line=11, body="second"),
            ReviewComment(path="main.go", line=100, body="hallucinated"),
        ]

        valid, filtered = filter_valid_comments(comments, line_map)

        assert [c.line for c in valid] == [10, 11]
        assert filtered == 1

    def test_unknown_file_is_filtered(self) -> None:
        line_map = LineValidityMap({"main.go": {1}})

        valid, filtered = filter_valid_comments(
            [ReviewComment(path="other.go", line=1, body="x")], line_map
        )

        assert valid == []
        assert filtered == 1

    def test_order_is_preserved(self) -> None:
        line_map = LineValidityMap({"a": {1, 2, 3}})
        comments = [ReviewComment(path="a", line=n, body=str(n)) for n in (3, 1, 2)]

        valid, _ = filter_valid_comments(comments, line_map)

        assert [c.line for c in valid] == [3, 1, 2]

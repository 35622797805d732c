from enum import StrEnum


class ReviewApproval(StrEnum):
    """Review verdict, totally ordered by strictness: request_changes > comment > approve."""

    APPROVE = "approve"
    COMMENT = "comment"
    REQUEST_CHANGES = "request_changes"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @classmethod
    def coerce(cls, value: object) -> "ReviewApproval":
        """Map any raw value to a verdict; unknown or missing values become ``COMMENT``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return cls.COMMENT

    @classmethod
    def strictest(cls, a: object, b: object) -> "ReviewApproval":
        left, right = cls.coerce(a), cls.coerce(b)
        return left if left.rank >= right.rank else right


_RANKS = {
    ReviewApproval.APPROVE: 0,
    ReviewApproval.COMMENT: 1,
    ReviewApproval.REQUEST_CHANGES: 2,
}

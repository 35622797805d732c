from enum import StrEnum


class ReviewSeverity(StrEnum):
    BLOCKER = "blocker"
    SUGGESTION = "suggestion"
    NITPICK = "nitpick"

    @classmethod
    def default(cls) -> "ReviewSeverity":
        return cls.SUGGESTION

from dataclasses import dataclass


@dataclass(frozen=True)
class ReviewRequest:
    """A pull request diff plus the metadata shown to the reviewer."""

    diff: str
    title: str = ""
    description: str = ""

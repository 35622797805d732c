from dataclasses import dataclass, field


@dataclass(frozen=True, kw_only=True)
class DiffInfo:
    """Summary statistics of a unified diff."""

    files: list[str] = field(default_factory=list)
    total_lines: int = 0
    additions: int = 0
    deletions: int = 0

from chunked_code_review.core.domain.diff import DiffInfo

_NEW_FILE_PREFIX = "+++ b/"


def parse_diff_info(diff: str) -> DiffInfo:
    """Collect changed paths and added/deleted line counts from *diff*."""
    files: list[str] = []
    additions = deletions = 0
    lines = diff.split("\n") if diff else []
    for line in lines:
        if line.startswith(_NEW_FILE_PREFIX):
            files.append(line.removeprefix(_NEW_FILE_PREFIX))
        elif line.startswith("+") and not line.startswith("+++"):
            additions += 1
        elif line.startswith("-") and not line.startswith("---"):
            deletions += 1
    return DiffInfo(files=files, total_lines=len(lines), additions=additions, deletions=deletions)

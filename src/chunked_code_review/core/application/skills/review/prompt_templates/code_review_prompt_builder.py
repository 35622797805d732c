from chunked_code_review.core.application.ports import ReviewPromptBuilderPort

_NO_DESCRIPTION = "(No description provided)"


class CodeReviewPromptBuilder(ReviewPromptBuilderPort):
    """Builds system + user prompts for the review engine.

    Inputs are wrapped in XML-style delimiters so diff content cannot be
    mistaken for instructions.
    """

    def __init__(self, project_context: str = "", instructions: str = "") -> None:
        self._project_context = project_context
        self._instructions = instructions

    # ── System Prompt ──────────────────────────────────────────────

    def build_system_prompt(self) -> str:
        sections = [_reviewer_role_section(), _suggestion_rules_section(), _line_number_rules_section()]
        if self._project_context:
            sections.append(f"## Project Context\n\n{self._project_context}")
        if self._instructions:
            sections.append(f"## Repository-Specific Instructions\n\n{self._instructions}")
        return "\n\n".join(sections)

    # ── User Prompt ────────────────────────────────────────────────

    def build_review_prompt(
        self,
        title: str,
        description: str,
        diff_excerpt: str,
        chunk_index: int | None = None,
        chunk_total: int | None = None,
        file_paths: list[str] | None = None,
    ) -> str:
        chunked = chunk_index is not None and chunk_total is not None
        sections = ["Review the following pull request diff."]
        if chunked:
            sections.append(_chunk_notice_section(chunk_index, chunk_total))  # type: ignore[arg-type]
        sections.append(_pull_request_section(title, description))
        if chunked and file_paths:
            sections.append(_file_list_section(file_paths))
        sections.append(_output_contract_section(chunked))
        sections.append(_diff_section(diff_excerpt))
        return "\n\n".join(sections)


# ── System Prompt Helpers ─────────────────────────────────────────────


def _reviewer_role_section() -> str:
    return (
        "You are an expert code reviewer. Review pull request diffs and give "
        "actionable, specific feedback.\n\n"
        "Focus on:\n"
        "- Bugs and logic errors\n"
        "- Security vulnerabilities\n"
        "- Performance issues\n"
        "- Code that is genuinely hard to follow\n\n"
        "Do NOT comment on formatting, minor style preferences, or trivial issues "
        "that do not affect behaviour."
    )


def _suggestion_rules_section() -> str:
    return (
        "When you have a concrete fix, use a suggestion block:\n\n"
        "```suggestion\nfixed code here\n```\n\n"
        "A suggestion replaces ONLY the single line the comment is attached to. "
        "Include only the replacement for that line. If the fix spans several "
        "existing lines, describe it in prose instead."
    )


def _line_number_rules_section() -> str:
    return (
        "The diff is annotated with new-file line numbers: every line inside a hunk "
        'is prefixed with its number, e.g. "   42 | +code". Always use the number '
        "before the | separator. Deleted lines have no number and cannot be "
        "commented on. Never derive line numbers from hunk headers yourself."
    )


# ── User Prompt Helpers ───────────────────────────────────────────────


def _chunk_notice_section(chunk_index: int, chunk_total: int) -> str:
    return (
        f"**IMPORTANT: This is chunk {chunk_index + 1} of {chunk_total}.** Focus only "
        "on the files in this chunk. Other files are being reviewed separately."
    )


def _pull_request_section(title: str, description: str) -> str:
    return (
        f"**Pull Request Title:** {title}\n\n"
        f"**Pull Request Description:**\n{description or _NO_DESCRIPTION}"
    )


def _file_list_section(file_paths: list[str]) -> str:
    listing = "\n".join(f"- {path}" for path in file_paths)
    return f"**Files in this chunk:**\n{listing}"


def _output_contract_section(chunked: bool) -> str:
    scope = "THIS CHUNK" if chunked else "the pull request"
    return (
        "Respond with a single JSON object in exactly this format:\n"
        "{\n"
        f'  "summary": "Brief assessment of {scope} (1-2 sentences)",\n'
        '  "comments": [\n'
        "    {\n"
        '      "path": "path/to/file.go",\n'
        '      "line": 42,\n'
        '      "body": "What is wrong and how to fix it.",\n'
        '      "severity": "suggestion"\n'
        "    }\n"
        "  ],\n"
        '  "approval": "comment"\n'
        "}\n\n"
        "Rules:\n"
        '1. "approval" must be one of "approve", "request_changes", "comment". '
        f'Use "approve" only if {scope} has no issues; "request_changes" for bugs, '
        'security issues or serious problems; "comment" for suggestions.\n'
        '2. "severity" must be one of "blocker", "suggestion", "nitpick".\n'
        '3. "path" must match a file path from the diff exactly.\n'
        '4. "line" must be a number shown before the | separator.\n'
        "5. Return an empty comments array when there are no issues.\n"
        "6. Return ONLY the JSON object, with no Markdown fences or extra text."
    )


def _diff_section(diff_excerpt: str) -> str:
    return f"<diff>\n{diff_excerpt}\n</diff>"

from abc import ABC, abstractmethod


class ReviewPromptBuilderPort(ABC):
    """Port for the collaborator that knows the prompt format of the target engine."""

    @abstractmethod
    def build_system_prompt(self) -> str:
        """Return the system prompt shared by every dispatch of a review."""

    @abstractmethod
    def build_review_prompt(
        self,
        title: str,
        description: str,
        diff_excerpt: str,
        chunk_index: int | None = None,
        chunk_total: int | None = None,
        file_paths: list[str] | None = None,
    ) -> str:
        """Return the user prompt for one diff excerpt.

        *diff_excerpt* arrives already annotated with new-file line numbers.
        ``chunk_index``/``chunk_total``/``file_paths`` are only passed when the
        excerpt is one chunk of a larger diff.
        """

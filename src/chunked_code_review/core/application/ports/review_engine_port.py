from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from chunked_code_review.core.domain.quality import TokenUsage


@dataclass(frozen=True)
class EngineReply:
    """Raw, untrusted text returned by the review engine plus its token accounting."""

    text: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    model: str = ""


class ReviewEnginePort(ABC):
    """Port for the external LLM reviewer.

    Implementations MUST raise:
        - ProviderError: on provider-level failures. Set ``retryable=True``
          for rate limiting, 5xx responses, connection errors and timeouts.

    ``ProviderError`` lives in ``core.application.ports.common.exceptions``.
    """

    @abstractmethod
    async def invoke(self, system_prompt: str, user_prompt: str, timeout: float) -> EngineReply:
        """Send one review request and return the engine's raw reply.

        Args:
            system_prompt: Reviewer role and output rules.
            user_prompt: Title, description and the annotated diff excerpt.
            timeout: Hard deadline for this single call, in seconds.

        Raises:
            ProviderError: When the engine fails or the deadline passes.
        """

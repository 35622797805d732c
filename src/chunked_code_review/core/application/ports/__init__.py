from chunked_code_review.core.application.ports.review_engine_port import (
    EngineReply,
    ReviewEnginePort,
)
from chunked_code_review.core.application.ports.review_prompt_builder_port import (
    ReviewPromptBuilderPort,
)

__all__ = ["EngineReply", "ReviewEnginePort", "ReviewPromptBuilderPort"]

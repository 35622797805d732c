"""Composition root: wires settings into the review engine, skills and workflow."""

from chunked_code_review.core.application.policies.retry_policy import RetryPolicy
from chunked_code_review.core.application.ports import ReviewEnginePort
from chunked_code_review.core.application.skills.review.dispatch_chunk_review_skill import (
    DispatchChunkReviewSkill,
)
from chunked_code_review.core.application.skills.review.prompt_templates.code_review_prompt_builder import (
    CodeReviewPromptBuilder,
)
from chunked_code_review.core.application.workflows.review.chunked_review_workflow import (
    ChunkedReviewWorkflow,
)
from chunked_code_review.infrastructure.adapters.llm.litellm_review_engine_adapter import (
    LiteLlmReviewEngineAdapter,
)
from chunked_code_review.infrastructure.configuration.main_settings import Settings


def build_review_workflow(
    settings: Settings, engine: ReviewEnginePort | None = None
) -> ChunkedReviewWorkflow:
    """Assemble a ready-to-run workflow. ``engine`` overrides the litellm adapter."""
    retry_policy = RetryPolicy(
        max_retries=settings.max_retries,
        base_delay=settings.retry_base_delay_seconds,
        max_delay=settings.retry_max_delay_seconds,
    )
    dispatch = DispatchChunkReviewSkill(
        engine=engine or LiteLlmReviewEngineAdapter(settings),
        prompt_builder=CodeReviewPromptBuilder(
            project_context=settings.project_context,
            instructions=settings.instructions,
        ),
        retry_policy=retry_policy,
        call_timeout=settings.call_timeout_seconds,
    )
    return ChunkedReviewWorkflow(
        dispatch=dispatch,
        chunk_threshold_bytes=settings.chunk_threshold_bytes,
        max_chunk_size_bytes=settings.max_chunk_size_bytes,
        max_concurrent_chunks=settings.max_concurrent_chunks,
        exclude_patterns=settings.exclude_patterns,
    )

import asyncio
from functools import partial

import structlog

from chunked_code_review.core.application.diff.line_mapper import (
    annotate_diff_with_line_numbers,
    parse_diff_lines,
)
from chunked_code_review.core.application.exceptions import SkillExecutionError
from chunked_code_review.core.application.policies.retry_policy import RetryPolicy
from chunked_code_review.core.application.ports import (
    EngineReply,
    ReviewEnginePort,
    ReviewPromptBuilderPort,
)
from chunked_code_review.core.application.ports.common.exceptions import ProviderError
from chunked_code_review.core.application.skills.review.comment_filter import (
    filter_valid_comments,
)
from chunked_code_review.core.application.skills.review.contracts.dispatch_chunk_review_input import (
    DispatchChunkReviewInput,
)
from chunked_code_review.core.application.skills.review.contracts.review_response_schema import (
    ReviewResponseSchema,
)
from chunked_code_review.core.application.skills.review.review_response_parser import (
    parse_review_response,
)
from chunked_code_review.core.application.skills.review.severity_rules import (
    determine_approval_from_severity,
)
from chunked_code_review.core.application.skills.skill import BaseSkill
from chunked_code_review.core.domain.quality import (
    ChunkResult,
    ReviewApproval,
    ReviewComment,
    ReviewSeverity,
)

logger = structlog.get_logger()


class DispatchChunkReviewSkill(BaseSkill[DispatchChunkReviewInput, ChunkResult]):
    """Sends one diff excerpt to the review engine and returns a validated result.

    Pipeline: annotate -> build prompt -> invoke (deadline + retry) -> parse
    -> validate -> drop comments on lines absent from the excerpt.
    """

    def __init__(
        self,
        engine: ReviewEnginePort,
        prompt_builder: ReviewPromptBuilderPort,
        retry_policy: RetryPolicy,
        call_timeout: float,
    ) -> None:
        self._engine = engine
        self._prompt_builder = prompt_builder
        self._retry_policy = retry_policy
        self._call_timeout = call_timeout

    async def execute(self, input_data: DispatchChunkReviewInput) -> ChunkResult:
        log = logger.bind(review_target=input_data.label)
        line_map = parse_diff_lines(input_data.diff)
        system_prompt, user_prompt = self._build_prompts(input_data)
        log.info(
            "Reviewing diff excerpt",
            files=len(line_map),
            size_bytes=len(input_data.diff.encode("utf-8")),
        )

        try:
            reply = await self._retry_policy.run(
                partial(self._invoke_with_deadline, system_prompt, user_prompt),
                operation=f"review_{input_data.label}",
            )
        except ProviderError as exc:
            raise SkillExecutionError(
                f"Review engine error: {exc}",
                context={"review_target": input_data.label, "status_code": exc.status_code},
            ) from exc

        schema = parse_review_response(reply.text)
        comments, filtered = filter_valid_comments(self._to_domain_comments(schema), line_map)
        result = ChunkResult(
            index=input_data.index,
            summary=schema.summary,
            comments=comments,
            approval=ReviewApproval(schema.approval),
            filtered_count=filtered,
            usage=reply.usage,
        )
        implied = determine_approval_from_severity(comments)
        if implied.rank > result.approval.rank:
            log.warning(
                "Engine approval is more lenient than its comment severities",
                approval=result.approval.value,
                implied_approval=implied.value,
            )
        log.info(
            "Diff excerpt reviewed",
            comments=len(result.comments),
            filtered_comments=filtered,
            approval=result.approval.value,
            tokens_in=reply.usage.input_tokens,
            tokens_out=reply.usage.output_tokens,
        )
        return result

    def _build_prompts(self, input_data: DispatchChunkReviewInput) -> tuple[str, str]:
        annotated = annotate_diff_with_line_numbers(input_data.diff)
        chunk = input_data.chunk
        user_prompt = self._prompt_builder.build_review_prompt(
            title=input_data.title,
            description=input_data.description,
            diff_excerpt=annotated,
            chunk_index=chunk.index if chunk else None,
            chunk_total=chunk.total if chunk else None,
            file_paths=chunk.file_paths if chunk else None,
        )
        return self._prompt_builder.build_system_prompt(), user_prompt

    async def _invoke_with_deadline(self, system_prompt: str, user_prompt: str) -> EngineReply:
        async with asyncio.timeout(self._call_timeout):
            return await self._engine.invoke(system_prompt, user_prompt, self._call_timeout)

    @staticmethod
    def _to_domain_comments(schema: ReviewResponseSchema) -> list[ReviewComment]:
        return [
            ReviewComment(
                path=c.path,
                line=c.line,
                body=c.body,
                severity=ReviewSeverity(c.severity),
            )
            for c in schema.comments
        ]

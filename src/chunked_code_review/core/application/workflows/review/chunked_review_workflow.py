"""Review pipeline that splits oversized diffs into concurrently reviewed chunks."""

import asyncio
from collections.abc import Sequence

import structlog
from structlog.contextvars import bind_contextvars

from chunked_code_review.core.application.diff import (
    chunk_diff,
    filter_diff,
    parse_diff_info,
    parse_diff_lines,
)
from chunked_code_review.core.application.exceptions import ChunkReviewError
from chunked_code_review.core.application.skills.review.contracts.dispatch_chunk_review_input import (
    DispatchChunkReviewInput,
)
from chunked_code_review.core.application.skills.review.dispatch_chunk_review_skill import (
    DispatchChunkReviewSkill,
)
from chunked_code_review.core.application.skills.review.merge_review_results import (
    merge_chunk_results,
)
from chunked_code_review.core.application.workflows.base_workflow import BaseWorkflow
from chunked_code_review.core.application.workflows.review.contracts.review_request import (
    ReviewRequest,
)
from chunked_code_review.core.domain.diff import Chunk
from chunked_code_review.core.domain.quality import ChunkResult, MergedReview, ReviewApproval

logger = structlog.get_logger()

EMPTY_CHUNKED_DIFF_SUMMARY = "No content to review."

DEFAULT_CHUNK_THRESHOLD_BYTES = 100 * 1024
DEFAULT_MAX_CHUNK_SIZE_BYTES = 80 * 1024
DEFAULT_MAX_CONCURRENT_CHUNKS = 5


class ChunkedReviewWorkflow(BaseWorkflow[ReviewRequest, MergedReview]):
    """Filter -> size check -> (single dispatch | pack -> bounded fan-out -> merge)."""

    def __init__(
        self,
        dispatch: DispatchChunkReviewSkill,
        chunk_threshold_bytes: int = DEFAULT_CHUNK_THRESHOLD_BYTES,
        max_chunk_size_bytes: int = DEFAULT_MAX_CHUNK_SIZE_BYTES,
        max_concurrent_chunks: int = DEFAULT_MAX_CONCURRENT_CHUNKS,
        exclude_patterns: Sequence[str] = (),
    ) -> None:
        if max_concurrent_chunks < 1:
            raise ValueError(f"max_concurrent_chunks must be >= 1, got {max_concurrent_chunks}")
        self._dispatch = dispatch
        self._chunk_threshold_bytes = chunk_threshold_bytes
        self._max_chunk_size_bytes = max_chunk_size_bytes
        self._max_concurrent_chunks = max_concurrent_chunks
        self._exclude_patterns = list(exclude_patterns)

    def needs_chunking(self, diff: str) -> bool:
        return len(diff.encode("utf-8")) > self._chunk_threshold_bytes

    async def execute(self, request: ReviewRequest) -> MergedReview:
        bind_contextvars(event_type="workflow.chunked_review")
        diff = filter_diff(request.diff, self._exclude_patterns)
        info = parse_diff_info(diff)
        logger.info(
            "Chunked review workflow started",
            files=len(info.files),
            additions=info.additions,
            deletions=info.deletions,
            size_bytes=len(diff.encode("utf-8")),
        )
        if not self.needs_chunking(diff):
            return await self._review_whole(request, diff)
        return await self._review_chunked(request, diff)

    # ── Small path ───────────────────────────────────────────────────

    async def _review_whole(self, request: ReviewRequest, diff: str) -> MergedReview:
        result = await self._dispatch.execute(
            DispatchChunkReviewInput(title=request.title, description=request.description, diff=diff)
        )
        logger.info("Review completed", processing_status="SUCCESS", chunked=False)
        return MergedReview(
            summary=result.summary,
            comments=list(result.comments),
            approval=result.approval,
            usage=result.usage,
            filtered_count=result.filtered_count,
        )

    # ── Chunked path ─────────────────────────────────────────────────

    async def _review_chunked(self, request: ReviewRequest, diff: str) -> MergedReview:
        # Malformed hunks fail the whole request as a DiffParseError, not per chunk.
        parse_diff_lines(diff)
        chunks = chunk_diff(diff, self._max_chunk_size_bytes)
        if not chunks:
            logger.info("Chunked diff produced no chunks", processing_status="SKIPPED")
            return MergedReview(summary=EMPTY_CHUNKED_DIFF_SUMMARY, approval=ReviewApproval.COMMENT)

        logger.info(
            "Reviewing diff in chunks",
            chunks=len(chunks),
            max_concurrent=self._max_concurrent_chunks,
        )
        results: list[ChunkResult | None] = [None] * len(chunks)
        semaphore = asyncio.Semaphore(self._max_concurrent_chunks)
        try:
            async with asyncio.TaskGroup() as group:
                for chunk in chunks:
                    group.create_task(self._review_chunk(request, chunk, semaphore, results))
        except ExceptionGroup as eg:
            first = eg.exceptions[0]
            logger.error(
                "Chunked review aborted",
                processing_status="FAILED",
                error_type=type(first).__name__,
                error_details=str(first),
            )
            raise first

        merged = merge_chunk_results(results)
        logger.info(
            "Review completed",
            processing_status="SUCCESS",
            chunked=True,
            chunks=len(chunks),
            comments=len(merged.comments),
            approval=merged.approval.value,
        )
        return merged

    async def _review_chunk(
        self,
        request: ReviewRequest,
        chunk: Chunk,
        semaphore: asyncio.Semaphore,
        results: list[ChunkResult | None],
    ) -> None:
        async with semaphore:
            try:
                results[chunk.index] = await self._dispatch.execute(
                    DispatchChunkReviewInput.for_chunk(request.title, request.description, chunk)
                )
            except Exception as exc:
                raise ChunkReviewError(chunk.index, chunk.total, exc) from exc

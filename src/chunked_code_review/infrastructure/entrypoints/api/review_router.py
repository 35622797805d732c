import time

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from chunked_code_review.core.application.exceptions import (
    ApplicationError,
    DiffParseError,
    SkillExecutionError,
    WorkflowExecutionError,
)
from chunked_code_review.core.application.workflows.review.chunked_review_workflow import (
    ChunkedReviewWorkflow,
)
from chunked_code_review.core.application.workflows.review.contracts.review_request import (
    ReviewRequest,
)
from chunked_code_review.core.domain.quality import MergedReview
from chunked_code_review.infrastructure.entrypoints.api.dtos.review_dtos import (
    MergedReviewDTO,
    ReviewRequestDTO,
)
from chunked_code_review.infrastructure.entrypoints.api.security import validate_api_key
from chunked_code_review.infrastructure.observability.logger_factory_service import get_logger
from chunked_code_review.infrastructure.observability.metrics_service import (
    FILTERED_COMMENTS_TOTAL,
    REVIEW_CHUNKS_TOTAL,
    REVIEW_DURATION_SECONDS,
    REVIEWS_TOTAL,
)
from chunked_code_review.infrastructure.observability.tracing_setup import (
    get_tracer,
    trace_operation,
)

logger = get_logger("review_router")
router = APIRouter()


def get_workflow(request: Request) -> ChunkedReviewWorkflow:
    return request.app.state.workflow


@router.post(
    "/reviews",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(validate_api_key)],
    response_model=MergedReviewDTO,
)
@trace_operation("http.create_review")
async def create_review(
    payload: ReviewRequestDTO,
    workflow: ChunkedReviewWorkflow = Depends(get_workflow),
) -> MergedReviewDTO | JSONResponse:
    review_request = ReviewRequest(
        diff=payload.diff, title=payload.title, description=payload.description
    )
    path = "chunked" if workflow.needs_chunking(payload.diff) else "single"
    start = time.perf_counter()
    try:
        with get_tracer().start_as_current_span("workflow.chunked_review") as span:
            span.set_attribute("review.path", path)
            review = await workflow.execute(review_request)
    except ApplicationError as exc:
        REVIEWS_TOTAL.labels(path=path, outcome="failure").inc()
        return _error_response(exc)
    finally:
        REVIEW_DURATION_SECONDS.labels(path=path).observe(time.perf_counter() - start)

    _record_review_outcome(path, review)
    return MergedReviewDTO.from_domain(review)


def _record_review_outcome(path: str, review: MergedReview) -> None:
    REVIEWS_TOTAL.labels(path=path, outcome="success").inc()
    REVIEW_CHUNKS_TOTAL.inc(review.chunk_count or 1)
    FILTERED_COMMENTS_TOTAL.inc(review.filtered_count)


def _error_response(exc: ApplicationError) -> JSONResponse:
    """Structural diff problems are the caller's fault; everything else is upstream."""
    if isinstance(exc, DiffParseError):
        http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    elif isinstance(exc, (SkillExecutionError, WorkflowExecutionError)):
        http_status = status.HTTP_502_BAD_GATEWAY
    else:
        http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    logger.error(
        "Review request failed",
        processing_status="ERROR",
        error_type=type(exc).__name__,
        error_details=exc.message,
        error_code=http_status,
    )
    return JSONResponse(
        status_code=http_status,
        content={"detail": exc.message, "error_type": type(exc).__name__},
    )

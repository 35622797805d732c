from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from chunked_code_review.core.application.workflows.review.chunked_review_workflow import (
    ChunkedReviewWorkflow,
)
from chunked_code_review.infrastructure.configuration.main_settings import Settings
from chunked_code_review.infrastructure.entrypoints.api.health_router import (
    router as health_router,
)
from chunked_code_review.infrastructure.entrypoints.api.review_router import (
    router as review_router,
)
from chunked_code_review.infrastructure.observability.logger_factory_service import get_logger
from chunked_code_review.infrastructure.observability.logging import CorrelationMiddleware
from chunked_code_review.infrastructure.resolution.container import build_review_workflow

logger = get_logger("app_factory")


def create_app(settings: Settings, workflow: ChunkedReviewWorkflow | None = None) -> FastAPI:
    logger.info(
        "Boot diagnostics",
        app_name=settings.app_name,
        llm_model=settings.review_llm_model,
        chunk_threshold_bytes=settings.chunk_threshold_bytes,
        max_chunk_size_bytes=settings.max_chunk_size_bytes,
        max_concurrent_chunks=settings.max_concurrent_chunks,
        api_key_required=settings.api_key is not None,
    )

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.workflow = workflow or build_review_workflow(settings)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(
            "Request validation failed",
            processing_status="ERROR",
            error_type="RequestValidationError",
            error_details=str(exc.errors()),
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    app.add_middleware(CorrelationMiddleware)
    app.include_router(health_router)
    app.include_router(review_router, prefix="/api/v1")
    app.mount("/metrics", make_asgi_app())

    return app

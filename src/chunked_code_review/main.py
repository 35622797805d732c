import uvicorn

from chunked_code_review.infrastructure.configuration.main_settings import Settings
from chunked_code_review.infrastructure.entrypoints.api.app_factory import create_app
from chunked_code_review.infrastructure.observability.logger_factory_service import (
    configure_logging,
)
from chunked_code_review.infrastructure.observability.tracing_setup import configure_tracing


def dev():
    """Run the development server."""
    uvicorn.run(
        "chunked_code_review.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.log_level.lower(),
    )


# Instantiate global app for ASGI
settings = Settings()
configure_logging(settings.log_level)
configure_tracing()
app = create_app(settings)

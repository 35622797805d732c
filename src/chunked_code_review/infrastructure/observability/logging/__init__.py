from chunked_code_review.infrastructure.observability.logging.correlation_middleware import (
    CorrelationMiddleware,
)
from chunked_code_review.infrastructure.observability.logging.review_schema_processor import (
    review_schema_processor,
)

__all__ = [
    "CorrelationMiddleware",
    "review_schema_processor",
]

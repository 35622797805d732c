from chunked_code_review.core.application.ports.common.exceptions.provider_error import (
    ProviderError,
)

__all__ = ["ProviderError"]

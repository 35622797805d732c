from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ProviderError(Exception):
    """Failure reported by an external provider (the review engine).

    ``retryable`` marks transient conditions: rate limiting, 5xx responses,
    connection drops and timeouts.
    """

    provider: str
    message: str
    retryable: bool = False
    status_code: int | None = None

    def __str__(self) -> str:
        code = f" status={self.status_code}" if self.status_code is not None else ""
        return f"{self.provider}: {self.message}{code}"

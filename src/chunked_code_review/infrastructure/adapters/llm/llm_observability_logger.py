"""Pure functions for logging LLM request/response payloads with redaction and Prometheus metrics."""

import json
from typing import Any

from chunked_code_review.core.domain.quality import TokenUsage
from chunked_code_review.infrastructure.observability.logger_factory_service import get_logger
from chunked_code_review.infrastructure.observability.metrics_service import (
    ENGINE_CALLS_TOTAL,
    LLM_LATENCY_SECONDS,
    LLM_TOKENS_TOTAL,
)
from chunked_code_review.infrastructure.observability.redaction_service import (
    redact_dict,
    redact_text,
)

logger = get_logger("llm_adapter")

_MAX_LOG_PROMPT_LENGTH = 10_000


def log_llm_request(messages: list[dict[str, Any]], model_id: str) -> None:
    """Log the redacted prompt payload before sending to LLM."""
    redacted = redact_dict({"messages": messages})
    redacted_prompt = json.dumps(redacted["messages"], ensure_ascii=False, default=str)
    if len(redacted_prompt) > _MAX_LOG_PROMPT_LENGTH:
        redacted_prompt = redacted_prompt[:_MAX_LOG_PROMPT_LENGTH] + "... [TRUNCATED]"
    logger.debug(
        "Sending payload to LLM",
        prompt_text=redacted_prompt,
        llm_model=model_id,
        tags=["llm-prompt"],
    )


def log_llm_response(usage: TokenUsage, model_id: str, duration_ms: float) -> None:
    """Log successful inference with token usage and duration, and record Prometheus metrics."""
    LLM_TOKENS_TOTAL.labels(model=model_id, type="prompt").inc(usage.input_tokens)
    LLM_TOKENS_TOTAL.labels(model=model_id, type="completion").inc(usage.output_tokens)
    LLM_LATENCY_SECONDS.labels(model=model_id).observe(duration_ms / 1000)
    ENGINE_CALLS_TOTAL.labels(outcome="success").inc()

    logger.info(
        "LLM inference completed",
        llm_model=model_id,
        tokens_in=usage.input_tokens,
        tokens_out=usage.output_tokens,
        processing_status="SUCCESS",
        processing_duration_ms=duration_ms,
        tags=["llm-response"],
    )


def log_llm_failure(exc: BaseException, model_id: str, retryable: bool) -> None:
    ENGINE_CALLS_TOTAL.labels(outcome="retryable_error" if retryable else "error").inc()
    logger.warning(
        "LLM inference failed",
        llm_model=model_id,
        processing_status="ERROR",
        error_type=type(exc).__name__,
        error_details=redact_text(str(exc)),
        error_retryable=retryable,
    )

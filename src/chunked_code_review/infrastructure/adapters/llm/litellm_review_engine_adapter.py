"""Implements ReviewEnginePort via ``litellm.acompletion``.

Every call carries its own deadline and every provider failure is translated
into a ``ProviderError`` whose ``retryable`` flag drives the retry policy.
"""

import asyncio
import os
import time
from typing import Any

import litellm

from chunked_code_review.core.application.ports import EngineReply, ReviewEnginePort
from chunked_code_review.core.application.ports.common.exceptions import ProviderError
from chunked_code_review.core.domain.quality import TokenUsage
from chunked_code_review.infrastructure.adapters.llm.llm_observability_logger import (
    log_llm_failure,
    log_llm_request,
    log_llm_response,
)
from chunked_code_review.infrastructure.configuration.llm_settings import LlmSettings
from chunked_code_review.infrastructure.observability.tracing_setup import get_tracer

_TRANSIENT_EXCEPTIONS: tuple[type[Exception], ...] = (
    litellm.RateLimitError,
    litellm.APIConnectionError,
    litellm.Timeout,
    litellm.InternalServerError,
    litellm.ServiceUnavailableError,
)


class LiteLlmReviewEngineAdapter(ReviewEnginePort):
    """Implements ReviewEnginePort via ``litellm.acompletion``.

    API keys are extracted from the injected ``LlmSettings`` and pushed into
    ``os.environ`` so that litellm's internal provider auto-detection picks
    them up transparently.
    """

    def __init__(self, settings: LlmSettings) -> None:
        self._model_id = settings.review_llm_model
        self._max_tokens = settings.llm_max_tokens
        self._inject_api_keys(settings)

    async def invoke(self, system_prompt: str, user_prompt: str, timeout: float) -> EngineReply:
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        log_llm_request(messages, self._model_id)

        with get_tracer().start_as_current_span("llm.completion") as span:
            span.set_attribute("llm.model", self._model_id)
            start = time.perf_counter()
            try:
                response = await asyncio.wait_for(
                    litellm.acompletion(
                        model=self._normalize_model_id(self._model_id),
                        messages=messages,
                        max_tokens=self._max_tokens,
                        timeout=timeout,
                    ),
                    timeout=timeout,
                )
            except Exception as exc:
                error = self._to_provider_error(exc)
                log_llm_failure(exc, self._model_id, error.retryable)
                raise error from exc
            duration_ms = round((time.perf_counter() - start) * 1000, 2)

        text = self._extract_text(response)
        usage = self._extract_usage(response)
        log_llm_response(usage, self._model_id, duration_ms)
        model = getattr(response, "model", None) or self._model_id
        return EngineReply(text=text, usage=usage, model=model)

    # ── Private helpers ──────────────────────────────────────────

    def _extract_text(self, response: Any) -> str:
        content: str | None = response.choices[0].message.content
        if not content:
            raise ProviderError(
                provider=self._model_id,
                message="LLM returned empty content for review request",
            )
        return content

    @staticmethod
    def _extract_usage(response: Any) -> TokenUsage:
        usage = getattr(response, "usage", None)
        if usage is None:
            return TokenUsage()
        return TokenUsage(
            input_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            output_tokens=getattr(usage, "completion_tokens", 0) or 0,
        )

    def _to_provider_error(self, exc: Exception) -> ProviderError:
        status_code = getattr(exc, "status_code", None)
        if not isinstance(status_code, int):
            status_code = None
        retryable = (
            isinstance(exc, (*_TRANSIENT_EXCEPTIONS, TimeoutError))
            or status_code == 429
            or (status_code is not None and status_code >= 500)
        )
        return ProviderError(
            provider=self._model_id,
            message=f"{type(exc).__name__}: {exc}",
            retryable=retryable,
            status_code=status_code,
        )

    @staticmethod
    def _normalize_model_id(model_id: str) -> str:
        """Convert ``provider:model`` to ``provider/model`` for litellm routing."""
        return model_id.replace(":", "/", 1)

    @staticmethod
    def _inject_api_keys(settings: LlmSettings) -> None:
        """Push non-null SecretStr keys into ``os.environ`` for litellm auto-detection."""
        mapping = {
            "OPENAI_API_KEY": settings.openai_api_key,
            "GEMINI_API_KEY": settings.gemini_api_key,
            "DEEPSEEK_API_KEY": settings.deepseek_api_key,
            "ANTHROPIC_API_KEY": settings.anthropic_api_key,
        }
        for env_var, secret in mapping.items():
            if secret is not None:
                os.environ[env_var] = secret.get_secret_value()

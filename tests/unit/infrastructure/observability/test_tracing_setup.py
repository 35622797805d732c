"""Unit tests — tracing_setup (span decorator and logger binding helpers)."""

from unittest.mock import MagicMock, patch

from chunked_code_review.infrastructure.observability import get_logger
from chunked_code_review.infrastructure.observability.tracing_setup import trace_operation

_GET_TRACER = "chunked_code_review.infrastructure.observability.tracing_setup.get_tracer"


def _tracer() -> tuple[MagicMock, MagicMock]:
    tracer = MagicMock()
    span = tracer.start_as_current_span.return_value.__enter__.return_value
    return tracer, span


class TestTraceOperation:
    async def test_async_function_wrapped_in_span(self) -> None:
        tracer, span = _tracer()

        @trace_operation("workflow.chunked_review", attributes={"review.path": "chunked"})
        async def review(value: int) -> int:
            return value * 2

        with patch(_GET_TRACER, return_value=tracer):
            assert await review(21) == 42

        tracer.start_as_current_span.assert_called_once_with("workflow.chunked_review")
        span.set_attribute.assert_called_once_with("review.path", "chunked")

    def test_sync_function_wrapped_in_span(self) -> None:
        tracer, span = _tracer()

        @trace_operation("diff.split")
        def split(text: str) -> list[str]:
            return text.split()

        with patch(_GET_TRACER, return_value=tracer):
            assert split("a b") == ["a", "b"]

        tracer.start_as_current_span.assert_called_once_with("diff.split")
        span.set_attribute.assert_not_called()

    def test_preserves_function_metadata(self) -> None:
        @trace_operation("noop")
        async def dispatch_chunk() -> None:
            """Docstring."""

        assert dispatch_chunk.__name__ == "dispatch_chunk"
        assert dispatch_chunk.__doc__ == "Docstring."


class TestGetLogger:
    def test_binds_component(self) -> None:
        log = get_logger("review_router").bind(chunk="chunk_1_of_2")

        assert log._context["context_component"] == "review_router"
        assert log._context["chunk"] == "chunk_1_of_2"

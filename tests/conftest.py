from collections.abc import Callable

import pytest

from chunked_code_review.infrastructure.configuration.main_settings import Settings


def _make_file_diff(path: str, body: list[str], start: int = 1) -> str:
    header = [
        f"diff --git a/{path} b/{path}",
        "index 1111111..2222222 100644",
        f"--- a/{path}",
        f"+++ b/{path}",
        f"@@ -{start},0 +{start},{len(body)} @@",
    ]
    return "\n".join(header + [f"+{line}" for line in body])


@pytest.fixture
def file_diff() -> Callable[..., str]:
    """Builder for a single-file diff section whose one hunk adds *body* at *start*."""
    return _make_file_diff


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        anthropic_api_key="mock_anthropic_key",
        review_llm_model="anthropic:claude-test",
        chunk_threshold_bytes=100 * 1024,
        max_chunk_size_bytes=80 * 1024,
        max_concurrent_chunks=5,
        call_timeout_seconds=5.0,
        max_retries=2,
        retry_base_delay_seconds=0.0,
        exclude_patterns=[],
        api_key=None,
        app_name="TestReview",
    )

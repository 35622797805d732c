"""Unit tests — DispatchChunkReviewSkill (AsyncMock engine, MagicMock prompt builder)."""

import asyncio
import json
from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from structlog.testing import capture_logs

from chunked_code_review.core.application.diff.chunk_packer import chunk_diff
from chunked_code_review.core.application.exceptions import (
    ResponseParseError,
    RetryExhaustedError,
    SkillExecutionError,
)
from chunked_code_review.core.application.policies.retry_policy import RetryPolicy
from chunked_code_review.core.application.ports import EngineReply
from chunked_code_review.core.application.ports.common.exceptions import ProviderError
from chunked_code_review.core.application.skills.review.contracts.dispatch_chunk_review_input import (
    DispatchChunkReviewInput,
)
from chunked_code_review.core.application.skills.review.dispatch_chunk_review_skill import (
    DispatchChunkReviewSkill,
)
from chunked_code_review.core.domain.quality import ReviewApproval, ReviewSeverity, TokenUsage


def _reply(comments: list[dict], approval: str = "comment", summary: str = "ok") -> EngineReply:
    payload = {"summary": summary, "comments": comments, "approval": approval}
    return EngineReply(text=json.dumps(payload), usage=TokenUsage(120, 30), model="test-model")


def _make_skill(
    engine: AsyncMock, max_retries: int = 2, call_timeout: float = 5.0
) -> tuple[DispatchChunkReviewSkill, MagicMock]:
    prompt_builder = MagicMock()
    prompt_builder.build_system_prompt.return_value = "SYS"
    prompt_builder.build_review_prompt.return_value = "USR"
    skill = DispatchChunkReviewSkill(
        engine=engine,
        prompt_builder=prompt_builder,
        retry_policy=RetryPolicy(max_retries=max_retries, base_delay=0),
        call_timeout=call_timeout,
    )
    return skill, prompt_builder


@pytest.fixture
def diff(file_diff: Callable[..., str]) -> str:
    return file_diff("src/app.py", ["a = 1", "b = 2", "c = 3"], start=10)


class TestDispatchChunkReviewSkill:
    async def test_returns_validated_result(self, diff: str) -> None:
        engine = AsyncMock()
        engine.invoke.return_value = _reply(
            [
                {"path": "src/app.py", "line": 10, "body": "Rename", "severity": "nitpick"},
                {"path": "src/app.py", "line": 11, "body": "Bug here", "severity": "blocker"},
                {"path": "src/app.py", "line": 100, "body": "Hallucinated"},
            ],
            approval="request_changes",
        )
        skill, _ = _make_skill(engine)

        result = await skill.execute(DispatchChunkReviewInput(title="T", description="D", diff=diff))

        assert result.index == 0
        assert result.approval is ReviewApproval.REQUEST_CHANGES
        assert [(c.line, c.severity) for c in result.comments] == [
            (10, ReviewSeverity.NITPICK),
            (11, ReviewSeverity.BLOCKER),
        ]
        assert result.filtered_count == 1
        assert result.usage == TokenUsage(120, 30)

    async def test_whole_diff_prompt_has_no_chunk_framing(self, diff: str) -> None:
        engine = AsyncMock()
        engine.invoke.return_value = _reply([])
        skill, prompt_builder = _make_skill(engine)

        await skill.execute(DispatchChunkReviewInput(title="T", description="D", diff=diff))

        kwargs = prompt_builder.build_review_prompt.call_args.kwargs
        assert kwargs["chunk_index"] is None
        assert kwargs["chunk_total"] is None
        assert kwargs["file_paths"] is None
        assert "   10 | +a = 1" in kwargs["diff_excerpt"]
        engine.invoke.assert_awaited_once_with("SYS", "USR", 5.0)

    async def test_chunk_prompt_carries_position_and_files(
        self, file_diff: Callable[..., str]
    ) -> None:
        full = "\n".join(file_diff(f"f{n}.py", ["x" * 40]) for n in range(3))
        chunks = chunk_diff(full, 200)
        engine = AsyncMock()
        engine.invoke.return_value = _reply([])
        skill, prompt_builder = _make_skill(engine)

        result = await skill.execute(DispatchChunkReviewInput.for_chunk("T", "D", chunks[1]))

        kwargs = prompt_builder.build_review_prompt.call_args.kwargs
        assert kwargs["chunk_index"] == 1
        assert kwargs["chunk_total"] == len(chunks)
        assert kwargs["file_paths"] == chunks[1].file_paths
        assert result.index == 1

    async def test_comment_on_file_from_other_chunk_is_filtered(
        self, file_diff: Callable[..., str]
    ) -> None:
        chunk = chunk_diff(file_diff("mine.py", ["x"]), 10_000)[0]
        engine = AsyncMock()
        engine.invoke.return_value = _reply(
            [{"path": "theirs.py", "line": 1, "body": "wrong chunk"}]
        )
        skill, _ = _make_skill(engine)

        result = await skill.execute(DispatchChunkReviewInput.for_chunk("T", "D", chunk))

        assert result.comments == []
        assert result.filtered_count == 1

    async def test_transient_error_is_retried(self, diff: str) -> None:
        engine = AsyncMock()
        engine.invoke.side_effect = [
            ProviderError(provider="p", message="overloaded", retryable=True, status_code=529),
            _reply([]),
        ]
        skill, _ = _make_skill(engine)

        result = await skill.execute(DispatchChunkReviewInput(title="T", description="", diff=diff))

        assert result.summary == "ok"
        assert engine.invoke.await_count == 2

    async def test_permanent_provider_error_becomes_skill_error(self, diff: str) -> None:
        engine = AsyncMock()
        engine.invoke.side_effect = ProviderError(
            provider="p", message="invalid key", retryable=False, status_code=401
        )
        skill, _ = _make_skill(engine)

        with pytest.raises(SkillExecutionError) as exc_info:
            await skill.execute(DispatchChunkReviewInput(title="T", description="", diff=diff))

        assert exc_info.value.context["status_code"] == 401
        engine.invoke.assert_awaited_once()

    async def test_malformed_response_is_not_retried(self, diff: str) -> None:
        engine = AsyncMock()
        engine.invoke.return_value = EngineReply(text="I cannot review this.")
        skill, _ = _make_skill(engine)

        with pytest.raises(ResponseParseError):
            await skill.execute(DispatchChunkReviewInput(title="T", description="", diff=diff))

        engine.invoke.assert_awaited_once()

    async def test_per_call_deadline_is_enforced_and_retried(self, diff: str) -> None:
        calls = 0

        async def _slow_invoke(*_: object) -> EngineReply:
            nonlocal calls
            calls += 1
            await asyncio.sleep(5)
            return _reply([])

        engine = AsyncMock()
        engine.invoke.side_effect = _slow_invoke
        skill, _ = _make_skill(engine, max_retries=1, call_timeout=0.01)

        with pytest.raises(RetryExhaustedError) as exc_info:
            await skill.execute(DispatchChunkReviewInput(title="T", description="", diff=diff))

        assert calls == 2
        assert isinstance(exc_info.value.last_error, TimeoutError)

    async def test_lenient_approval_is_kept_but_flagged(self, diff: str) -> None:
        engine = AsyncMock()
        engine.invoke.return_value = _reply(
            [{"path": "src/app.py", "line": 10, "body": "Crash", "severity": "blocker"}],
            approval="approve",
        )
        skill, _ = _make_skill(engine)

        with capture_logs() as logs:
            result = await skill.execute(DispatchChunkReviewInput(title="T", description="", diff=diff))

        assert result.approval is ReviewApproval.APPROVE
        flagged = [e for e in logs if e.get("implied_approval") == "request_changes"]
        assert len(flagged) == 1
        assert flagged[0]["log_level"] == "warning"

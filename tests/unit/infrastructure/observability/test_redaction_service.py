"""Unit tests — redaction_service (secrets scrubbed before prompts reach the logs)."""

import pytest

from chunked_code_review.infrastructure.observability.redaction_service import (
    redact_dict,
    redact_text,
)


class TestRedactText:
    @pytest.mark.parametrize(
        ("raw", "leaked"),
        [
            ("Authorization: Bearer abc.def-123", "abc.def-123"),
            ("x-api-key: k3y-value", "k3y-value"),
            ("api_key=supersecretvalue", "supersecretvalue"),
            ("password: 'hunter22'", "hunter22"),
            ("token sk-ant-0123456789abcdefXYZ in a prompt", "sk-ant-0123456789abcdefXYZ"),
        ],
    )
    def test_secret_is_removed(self, raw: str, leaked: str) -> None:
        redacted = redact_text(raw)

        assert leaked not in redacted
        assert "[REDACTED]" in redacted

    def test_plain_text_untouched(self) -> None:
        text = "+    return total / count"

        assert redact_text(text) == text

    def test_empty_string(self) -> None:
        assert redact_text("") == ""


class TestRedactDict:
    def test_sensitive_keys_masked(self) -> None:
        result = redact_dict({"Authorization": "Bearer x", "x-api-key": "k", "model": "claude"})

        assert result == {
            "Authorization": "[REDACTED]",
            "x-api-key": "[REDACTED]",
            "model": "claude",
        }

    def test_nested_structures(self) -> None:
        messages = {
            "messages": [
                {"role": "system", "content": "You review code."},
                {"role": "user", "content": "config has password=letmein123"},
            ]
        }

        result = redact_dict(messages)

        assert result["messages"][0]["content"] == "You review code."
        assert "letmein123" not in result["messages"][1]["content"]

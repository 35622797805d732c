"""Pure functions for pulling a review object out of free-form engine text."""

import json
import re
from collections.abc import Iterator
from typing import Any

from pydantic import ValidationError

from chunked_code_review.core.application.exceptions import ResponseParseError
from chunked_code_review.core.application.skills.review.contracts.review_response_schema import (
    ReviewResponseSchema,
)

_JSON_FENCE_RE = re.compile(r"```json\s*\n?(.*?)(?:```|\Z)", re.DOTALL | re.IGNORECASE)
_PREVIEW_LENGTH = 200
_REVIEW_KEYS = frozenset({"summary", "comments", "approval"})

_decoder = json.JSONDecoder()


def parse_review_response(text: str) -> ReviewResponseSchema:
    """Extract the first JSON object carrying a review field and validate it.

    Surrounding prose and Markdown code fences are tolerated, including
    ```suggestion blocks inside comment bodies.

    Raises:
        ResponseParseError: no review object is present, or it breaks the contract.
    """
    if not text or not text.strip():
        raise ResponseParseError("Engine returned an empty response")
    data = extract_first_json_object(text, required_keys=_REVIEW_KEYS)
    if data is None:
        raise ResponseParseError(
            "No review object found in engine response",
            context={"response_preview": _preview(text)},
        )
    try:
        return ReviewResponseSchema.model_validate(data)
    except ValidationError as exc:
        raise ResponseParseError(
            f"Engine response failed schema validation: {exc}",
            context={"response_preview": _preview(text)},
        ) from exc


def extract_first_json_object(
    text: str, *, required_keys: frozenset[str] = frozenset()
) -> dict[str, Any] | None:
    """Return the first decodable JSON object, preferring a ```json fenced block.

    With *required_keys*, objects sharing none of those keys are skipped, so a
    nested comment or a stray object in the prose is never taken for the answer.
    A fenced block cut short by a fence inside a string falls back to the full text.
    """
    for candidate in _candidates(text):
        obj = _scan_for_object(candidate, required_keys)
        if obj is not None:
            return obj
    return None


def _candidates(text: str) -> Iterator[str]:
    fenced = _JSON_FENCE_RE.search(text)
    if fenced:
        yield fenced.group(1)
    yield text


def _scan_for_object(text: str, required_keys: frozenset[str]) -> dict[str, Any] | None:
    start = text.find("{")
    while start != -1:
        try:
            obj, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            obj = None
        if isinstance(obj, dict) and (not required_keys or required_keys & obj.keys()):
            return obj
        start = text.find("{", start + 1)
    return None


def _preview(text: str) -> str:
    stripped = text.strip()
    if len(stripped) <= _PREVIEW_LENGTH:
        return stripped
    return stripped[:_PREVIEW_LENGTH] + "..."

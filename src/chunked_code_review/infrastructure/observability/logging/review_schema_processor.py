"""Structlog processor that reshapes flat events into the service log schema.

Keyword fields prefixed ``processing_``, ``error_``, ``context_`` and
``review_`` are nested into their own blocks; anything left over lands in
``extra``. Field extraction uses ``dict.pop(key, default)`` throughout.
"""

from __future__ import annotations

import os
from typing import Any
from uuid import uuid4

from opentelemetry import trace

SERVICE_NAME = "chunked-code-review"


def _build_root_fields(event_dict: dict[str, Any]) -> dict[str, Any]:
    return {
        "timestamp": event_dict.pop("timestamp", None),
        "level": event_dict.pop("level", "info"),
        "service": os.environ.get("SERVICE_NAME", SERVICE_NAME),
        "environment": os.environ.get("APP_ENV", "local"),
        "trace_id": event_dict.pop("trace_id", None),
        "correlation_id": event_dict.pop("correlation_id", None),
        "span_id": event_dict.pop("span_id", None),
        "message": event_dict.pop("event", ""),
    }


def _safe_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _build_processing(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    status = event_dict.pop("processing_status", None)
    if status is None:
        return None
    return {
        "status": status,
        "duration_ms": _safe_float(event_dict.pop("processing_duration_ms", None)),
        "retries": event_dict.pop("processing_retries", None),
    }


def _build_error(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    """Returns None if no error_type present."""
    error_type = event_dict.pop("error_type", None)
    if error_type is None:
        return None
    return {
        "type": error_type,
        "code": event_dict.pop("error_code", None),
        "details": event_dict.pop("error_details", None),
        "retryable": event_dict.pop("error_retryable", False),
    }


def _build_event_block(event_dict: dict[str, Any]) -> dict[str, Any]:
    return {
        "eventId": event_dict.pop("event_id", str(uuid4())),
        "eventType": event_dict.pop("event_type", None),
    }


def _build_context(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    component = event_dict.pop("context_component", None)
    endpoint = event_dict.pop("context_endpoint", None)
    method = event_dict.pop("context_method", None)
    if component is None and endpoint is None:
        return None
    return {"component": component, "endpoint": endpoint, "method": method}


def _build_review(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    """Chunk-scoped identifiers bound by the dispatcher."""
    target = event_dict.pop("review_target", None)
    if target is None:
        return None
    return {"target": target}


def _hex_to_uuid(hex_str: str) -> str:
    """Convert a 32-char hex string to UUID format 8-4-4-4-12."""
    return f"{hex_str[:8]}-{hex_str[8:12]}-{hex_str[12:16]}-{hex_str[16:20]}-{hex_str[20:]}"


def _inject_otel_ids(event_dict: dict[str, Any]) -> None:
    """Overwrite trace_id and span_id from the current OTel span if recording."""
    span = trace.get_current_span()
    if not span.is_recording():
        return
    ctx = span.get_span_context()
    event_dict["trace_id"] = _hex_to_uuid(format(ctx.trace_id, "032x"))
    event_dict["span_id"] = format(ctx.span_id, "016x")


def review_schema_processor(
    logger: Any,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    _inject_otel_ids(event_dict)
    result = _build_root_fields(event_dict)

    for key, builder in (
        ("processing", _build_processing),
        ("error", _build_error),
        ("context", _build_context),
        ("review", _build_review),
    ):
        block = builder(event_dict)
        if block is not None:
            result[key] = block

    result["event"] = _build_event_block(event_dict)
    if event_dict:
        result["extra"] = dict(event_dict)
    return result

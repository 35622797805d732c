"""Prometheus metrics declarations for the review service.

All metrics are declared statically at module level.
Labels use ONLY static enumerations, never dynamic IDs such as file paths or hashes.
"""

from prometheus_client import Counter, Histogram

# ── Review-level metrics ──────────────────────────────────────────

REVIEWS_TOTAL = Counter(
    "chunked_review_reviews_total",
    "Total completed review requests",
    ["path", "outcome"],
)

REVIEW_DURATION_SECONDS = Histogram(
    "chunked_review_duration_seconds",
    "End-to-end review duration in seconds",
    ["path"],
)

REVIEW_CHUNKS_TOTAL = Counter(
    "chunked_review_chunks_total",
    "Total chunks dispatched to the review engine",
)

FILTERED_COMMENTS_TOTAL = Counter(
    "chunked_review_filtered_comments_total",
    "Comments dropped because their line is not part of the diff",
)

# ── Engine metrics ────────────────────────────────────────────────

ENGINE_CALLS_TOTAL = Counter(
    "chunked_review_engine_calls_total",
    "Total review engine invocations",
    ["outcome"],
)

LLM_TOKENS_TOTAL = Counter(
    "chunked_review_llm_tokens_total",
    "Total LLM tokens consumed",
    ["model", "type"],
)

LLM_LATENCY_SECONDS = Histogram(
    "chunked_review_llm_latency_seconds",
    "LLM inference latency in seconds",
    ["model"],
)

import json

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReviewSettings(BaseSettings):
    """Tuning knobs for splitting, dispatching and retrying chunked reviews."""

    chunk_threshold_bytes: int = Field(default=100 * 1024, alias="REVIEW_CHUNK_THRESHOLD_BYTES", gt=0)
    max_chunk_size_bytes: int = Field(default=80 * 1024, alias="REVIEW_MAX_CHUNK_SIZE_BYTES", gt=0)
    max_concurrent_chunks: int = Field(default=5, alias="REVIEW_MAX_CONCURRENT_CHUNKS", ge=1)
    call_timeout_seconds: float = Field(default=180.0, alias="REVIEW_CALL_TIMEOUT_SECONDS", gt=0)
    max_retries: int = Field(default=3, alias="REVIEW_MAX_RETRIES", ge=0)
    retry_base_delay_seconds: float = Field(
        default=1.0, alias="REVIEW_RETRY_BASE_DELAY_SECONDS", ge=0
    )
    retry_max_delay_seconds: float = Field(
        default=30.0, alias="REVIEW_RETRY_MAX_DELAY_SECONDS", ge=0
    )
    exclude_patterns: list[str] = Field(default_factory=list, alias="REVIEW_EXCLUDE_PATTERNS")
    project_context: str = Field(default="", alias="REVIEW_PROJECT_CONTEXT")
    instructions: str = Field(default="", alias="REVIEW_INSTRUCTIONS")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    @field_validator("exclude_patterns", mode="before")
    @classmethod
    def parse_json_list(cls, value: object) -> list[str]:
        """Accept both raw JSON strings and native lists from .env or direct injection."""
        if value is None or value == "":
            return []
        if isinstance(value, str):
            parsed = json.loads(value)
            if not isinstance(parsed, list):
                raise ValueError(f"Expected a JSON list, got {type(parsed).__name__}")
            return parsed
        if isinstance(value, list):
            return value
        raise ValueError(f"Expected str or list, got {type(value).__name__}")

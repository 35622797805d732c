from pydantic import Field, SecretStr
from pydantic_settings import SettingsConfigDict

from chunked_code_review.infrastructure.configuration.llm_settings import LlmSettings
from chunked_code_review.infrastructure.configuration.review_settings import ReviewSettings


class Settings(ReviewSettings, LlmSettings):
    """
    Combines all settings.
    Inherits from ReviewSettings and LlmSettings.
    """

    app_name: str = Field(default="Chunked Code Review", alias="APP_NAME")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    api_key: SecretStr | None = Field(default=None, alias="API_KEY")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

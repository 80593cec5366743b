import os

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def model_post_init(self, __context: Any) -> None:
        """Pick up the legacy IQ_API_URL alias when the base URL is left at its default."""

        super().model_post_init(__context)

        legacy = os.getenv("IQ_API_URL")
        if legacy and "iq_base_url" not in self.model_fields_set:
            object.__setattr__(self, "iq_base_url", legacy)

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # IQ AI platform
    iq_base_url: str = Field(
        default="https://app.iqai.com",
        description="Base URL of the IQ AI agent trading platform",
    )
    default_chain_id: str = Field(
        default="252",
        description="Chain id used for holdings lookups when none is given (Fraxtal)",
    )

    # Timeouts
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout applied to every HTTP request made by the provider",
    )
    page_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        description="Max seconds to wait for a single transaction page",
    )
    collection_deadline_seconds: float = Field(
        default=45.0,
        gt=0,
        description="Max seconds for a whole paginated collection before returning a partial result",
    )

    # Analysis
    default_analysis_depth: int = Field(
        default=3,
        ge=0,
        description="Number of transaction pages fetched when no depth is given",
    )
    max_analysis_depth: int = Field(
        default=20,
        ge=1,
        description="Upper bound accepted for analysisDepth / pages",
    )
    recent_activity_limit: int = Field(
        default=10,
        ge=1,
        description="Number of most recent transactions echoed in analysis summaries",
    )

    @property
    def base_url(self) -> str:
        return self.iq_base_url.rstrip("/")


# Global settings instance
settings = Settings()

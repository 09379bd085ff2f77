"""Configuration management using Pydantic Settings.

Loads oracle credentials and engine limits from environment variables with
validation. The verification engine itself never reads the environment: a
``Settings`` instance is passed explicitly to ``VerificationService.from_settings``.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    api_title: str = Field(default="STEM Answer Verification Engine", description="API title")
    api_version: str = Field(default="0.1.0", description="API version")
    api_description: str = Field(
        default="Check AI-generated math, chemistry and code answers against ground truth",
        description="API description",
    )

    # Symbolic-math oracle (Wolfram Alpha)
    wolfram_app_id: str = Field(
        default="",
        description="Wolfram Alpha application id (empty = local arithmetic fallback)",
    )
    wolfram_base_url: str = Field(
        default="https://api.wolframalpha.com/v2/query",
        description="Wolfram Alpha full results endpoint",
    )

    # Sandbox execution oracle (Judge0)
    judge0_api_key: str = Field(
        default="",
        description="Judge0 API key (empty = local syntax linter fallback)",
    )
    judge0_base_url: str = Field(
        default="https://judge0-ce.p.rapidapi.com",
        description="Judge0 base URL",
    )
    sandbox_poll_interval: float = Field(
        default=0.5,
        ge=0.0,
        le=10.0,
        description="Seconds between submission status polls when the verdict is not final",
    )
    sandbox_max_polls: int = Field(
        default=10,
        ge=0,
        le=60,
        description="Maximum status polls after a non-final synchronous verdict (0 = never poll)",
    )

    # Resource limits
    oracle_timeout: float = Field(
        default=30.0, ge=1.0, le=300.0, description="Timeout for each oracle HTTP call in seconds"
    )
    batch_max_concurrency: int = Field(
        default=8,
        ge=1,
        le=256,
        description="Maximum number of batch items verified concurrently",
    )

    # CORS Configuration
    cors_allowed_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")

    # Logging
    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @property
    def math_oracle_configured(self) -> bool:
        """Whether a symbolic-math oracle credential is present."""
        return bool(self.wolfram_app_id.strip())

    @property
    def sandbox_configured(self) -> bool:
        """Whether a sandbox credential is present."""
        return bool(self.judge0_api_key.strip())

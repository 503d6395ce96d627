"""Pydantic models for configuration schema."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SlackConfig(BaseModel):
    """Slack-specific configuration."""

    model_config = ConfigDict(frozen=True)

    bot_token: str
    signing_secret: str
    bot_username: str = "Reacjilator Bot"
    thread_fetch_limit: int = Field(1, ge=1, le=1000)
    api_url: str = "https://slack.com/api/"

    @field_validator("bot_token")
    @classmethod
    def validate_bot_token(cls, v: str) -> str:
        """Validate Slack access token format."""
        if not v.startswith(("xoxb-", "xoxp-")):
            raise ValueError("Access token must start with xoxb- or xoxp-")
        return v

    @field_validator("signing_secret")
    @classmethod
    def validate_signing_secret(cls, v: str) -> str:
        """Reject an empty signing secret."""
        if not v.strip():
            raise ValueError("Signing secret must not be empty")
        return v


class TranslateConfig(BaseModel):
    """Google Cloud Translation configuration."""

    model_config = ConfigDict(frozen=True)

    project_id: str
    location: str = "global"
    mime_type: Literal["text/plain", "text/html"] = "text/plain"
    timeout: float = Field(30.0, gt=0, le=300)

    @property
    def parent(self) -> str:
        """Resource path used as the ``parent`` of translate requests."""
        return f"projects/{self.project_id}/locations/{self.location}"


class LanguagesConfig(BaseModel):
    """Emoji to language table adjustments."""

    model_config = ConfigDict(frozen=True)

    overrides: dict[str, str] = {}

    @field_validator("overrides")
    @classmethod
    def validate_overrides(cls, v: dict[str, str]) -> dict[str, str]:
        """Validate that override entries are non-empty."""
        for emoji, language in v.items():
            if not emoji or not language:
                raise ValueError(f"Invalid language override: {emoji!r} -> {language!r}")
        return v


class DispatchConfig(BaseModel):
    """Reaction event dispatch configuration."""

    model_config = ConfigDict(frozen=True)

    max_jitter_ms: int = Field(5000, ge=0, le=60000, description="Upper bound of startup delay")
    processing_timeout: int = Field(60, ge=5, le=900, description="Per-event timeout in seconds")
    mode: Literal["inline", "background"] = "background"

    @model_validator(mode="after")
    def check_jitter_below_timeout(self) -> "DispatchConfig":
        """The startup delay must stay below the per-event timeout."""
        if self.max_jitter_ms >= self.processing_timeout * 1000:
            raise ValueError(
                f"max_jitter_ms ({self.max_jitter_ms}) must be below "
                f"processing_timeout ({self.processing_timeout}s)"
            )
        return self


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"  # noqa: S104
    port: int = Field(3000, ge=1, le=65535)
    path: str = "/slack/events"

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate the webhook route."""
        if not v.startswith("/"):
            raise ValueError("Webhook path must start with /")
        return v


class FileLoggingConfig(BaseModel):
    """File logging configuration."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    path: Path = Path("/var/log/reacjilator/reacjilator.log")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "json"
    file: FileLoggingConfig = FileLoggingConfig()


class BridgeConfig(BaseSettings):
    """Root configuration for the reaction translation bridge."""

    slack: SlackConfig
    translate: TranslateConfig
    languages: LanguagesConfig = LanguagesConfig()
    dispatch: DispatchConfig = DispatchConfig()
    server: ServerConfig = ServerConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        frozen=True,
    )

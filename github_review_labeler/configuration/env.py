"""Pydantic Settings model for application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from github_review_labeler.utils.constants import DEFAULT_GITHUB_API_URL, DEFAULT_GITHUB_ORG, DEFAULT_MAX_CONCURRENCY


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False
    PORT: int = 0
    MAX_CONCURRENCY: int = DEFAULT_MAX_CONCURRENCY
    PROVISION_LABELS: bool = True

    # GitHub API settings
    GITHUB_API_URL: str = DEFAULT_GITHUB_API_URL
    GITHUB_ORG: str = DEFAULT_GITHUB_ORG
    GITHUB_ACCESS_TOKEN: str | None = None

"""Configuration for the PR Feedback Bot."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # App
    environment: str = Field(default="development", env="ENVIRONMENT")
    debug: bool = Field(default=True, env="DEBUG")
    host: str = Field(default="0.0.0.0", env="HOST")
    port: int = Field(default=8080, env="PORT")

    # LLM - OpenRouter (multi-provider gateway)
    openrouter_api_key: Optional[str] = Field(default=None, env="OPENROUTER_API_KEY")

    # GitHub App Authentication
    github_app_id: Optional[str] = Field(default=None, env="GITHUB_APP_ID")
    github_private_key: Optional[str] = Field(default=None, env="GITHUB_PRIVATE_KEY")
    github_webhook_secret: Optional[str] = Field(default=None, env="GITHUB_WEBHOOK_SECRET")

    # Login of the app's bot user, used to tag its own comments
    bot_login: str = Field(default="pga-github-app", env="BOT_LOGIN")

    # Review Configuration
    review_model: str = Field(default="claude-sonnet-4", env="REVIEW_MODEL")
    changed_files_page_size: int = Field(default=100, ge=1, le=100, env="CHANGED_FILES_PAGE_SIZE")
    max_changed_files: int = Field(default=300, ge=1, env="MAX_CHANGED_FILES")
    aggregation_max_workers: int = Field(default=1, ge=1, env="AGGREGATION_MAX_WORKERS")

    # Follow-up conversation context
    max_context_comments: int = Field(default=30, ge=1, env="MAX_CONTEXT_COMMENTS")
    max_comment_chars: int = Field(default=500, ge=1, env="MAX_COMMENT_CHARS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


settings = Settings()

"""
Configuration for the assistant.
Values come from IE_ASSISTANT_* environment variables or a .env file.
"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="IE_ASSISTANT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Session
    environment: str = "local"

    # Input
    char_limit: int = Field(default=500, ge=1)
    input_height: int = Field(default=3, ge=1)
    blink_interval: float = Field(default=0.5, gt=0)

    # Help line shows every binding, quick actions included
    show_full_help: bool = False

    # Logging
    log_level: str = "WARNING"
    log_file: Optional[str] = None

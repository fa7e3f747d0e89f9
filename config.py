"""Mailbox service configuration.

Settings are read from, in order of precedence (highest first):
    1. Explicit constructor arguments
    2. Environment variables prefixed with "MAILBOX_"
    3. A ``.env`` file in the working directory
    4. Default values

Environment Variables:
    MAILBOX_HOST=0.0.0.0
    MAILBOX_PORT=8000
    MAILBOX_LOG_LEVEL=DEBUG
    MAILBOX_THREAD_SAFE=false
    MAILBOX_NAME=inbox

Example:
    >>> from config import MailBoxSettings
    >>> settings = MailBoxSettings(port=9000)
    >>> settings.port
    9000
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class MailBoxSettings(BaseSettings):
    """Configuration for the mailbox service.

    Attributes:
        host: Host interface the HTTP server binds to.
        port: Port the HTTP server listens on.
        log_level: Root logging level.
        thread_safe: Whether the shared mailbox serializes operations with a lock.
        name: Display name of the shared mailbox.
    """

    model_config = SettingsConfigDict(
        env_prefix="MAILBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")
    log_level: LogLevel = Field(default="INFO", description="Root logging level")
    thread_safe: bool = Field(default=True, description="Serialize mailbox operations")
    name: str = Field(default="inbox", description="Display name of the mailbox")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Accept log levels in any case."""
        if isinstance(value, str):
            return value.upper()
        return value


@lru_cache
def get_settings() -> MailBoxSettings:
    """Return the process-wide settings, loading them on first use."""
    return MailBoxSettings()

"""
Writer configuration management using Pydantic Settings.

Values are loaded from SSE_-prefixed environment variables and an optional
.env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration loaded from environment variables and .env file.

    Optional Settings (with defaults):
        log_level: Logging level used by the command-line scripts
        strict_close: Raise finalize-time I/O errors from close() instead of
            logging and discarding them
    """

    model_config = SettingsConfigDict(
        env_prefix="SSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    strict_close: bool = False


settings = Settings()

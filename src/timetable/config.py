"""Timetable viewer configuration loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings


class TimetableConfig(BaseSettings):
    """Timetable viewer configuration loaded from environment variables.

    Settings are loaded from environment variables with sensible defaults.
    For local development, create a .env file in the project root.
    """

    # Timetable storage service
    timetable_api_url: str = Field(
        default="http://localhost:8000/api",
        description="Base URL of the timetable storage service",
    )
    request_timeout_seconds: float = Field(
        default=15.0,
        description="Timeout for a single HTTP request to the storage service",
    )

    # Retry settings
    fetch_retry_attempts: int = Field(
        default=3,
        description="Attempts per fetch before a transient failure is surfaced",
    )
    fetch_retry_wait_seconds: float = Field(
        default=2.0,
        description="Fixed wait between fetch attempts",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton pattern
_config: TimetableConfig | None = None


def get_config() -> TimetableConfig:
    """Get the timetable configuration singleton.

    Returns:
        TimetableConfig: Configuration instance
    """
    global _config
    if _config is None:
        _config = TimetableConfig()
    return _config

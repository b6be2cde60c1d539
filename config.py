"""Configuration management for the Netpulse report pipeline.

This module provides centralized configuration for all pipeline components.
All settings are loaded from environment variables once at start-up and
passed explicitly into the pipeline.

Environment Variables:
    Required:
        PERPLEXITY_API_KEY: Bearer token for the Perplexity collector
        OPENAI_API_KEY: Bearer token for the OpenAI summarizer
        APPWRITE_PROJECT_ID: Appwrite project identifier
        APPWRITE_API_KEY: Appwrite server API key
        APPWRITE_DB_ID: Database holding the report collection
        APPWRITE_COLLECTION_ID: Collection receiving report documents
        TELEGRAM_BOT_TOKEN: Bot token used to post reports
        TELEGRAM_CHANNEL_ID: Target channel (e.g. '@mychannel' or numeric id)

    Endpoints & Models:
        APPWRITE_ENDPOINT: Appwrite API base URL (default: Appwrite Cloud)
        PERPLEXITY_BASE_URL: OpenAI-compatible Perplexity base URL
        COLLECTOR_MODEL: Perplexity model used for collection
        OPENAI_BASE_URL: OpenAI base URL
        SUMMARY_MODEL: OpenAI model used for summarization
        TELEGRAM_API_BASE: Telegram Bot API base URL

    Output:
        LANGUAGE: Report language ('fa' for Persian, 'en' for English)
        REPORT_TIMEZONE: IANA timezone for the report timestamp
        TELEGRAM_DISABLE_PREVIEW: Suppress link previews in the channel post

    Pipeline Behavior:
        POLL_INTERVAL_SECONDS: Delay between runs in continuous mode

    Optional Features:
        ENABLE_LOGFIRE: Enable Logfire/OpenTelemetry tracing

    Logging:
        LOG_LEVEL: Logging verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        LOG_DIR: Directory for log files
        LOG_BACKUP_COUNT: Number of rotated log files to keep
        LOG_MAX_BYTES: Max log file size in bytes (0 = time-based rotation)
        LOG_FORMAT: Log format ('text' or 'json' for structured logging)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_APPWRITE_ENDPOINT = "https://cloud.appwrite.io/v1"
DEFAULT_PERPLEXITY_BASE_URL = "https://api.perplexity.ai"
DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TELEGRAM_API_BASE = "https://api.telegram.org"

SUPPORTED_LANGUAGES = ("fa", "en")


def _env(key: str, default: str = "") -> str:
    """Get string environment variable with optional default.

    Empty values are treated as unset so that a blank ``APPWRITE_ENDPOINT=``
    still falls back to the public default.

    Args:
        key: Environment variable name
        default: Value to return if not set

    Returns:
        Environment variable value or default
    """
    return os.environ.get(key) or default


def _env_int(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name
        default: Value to return if not set

    Returns:
        Parsed integer or default value

    Raises:
        ValueError: If value is set but cannot be parsed as integer
    """
    val = os.environ.get(key)
    if not val:
        return default
    try:
        return int(val)
    except ValueError:
        raise ValueError(f"Invalid integer value for {key}: '{val}'")


def _env_bool(key: str, default: bool = False) -> bool:
    """Get boolean environment variable with default.

    Recognizes truthy values: '1', 'true', 'yes', 'on'
    Recognizes falsy values: '0', 'false', 'no', 'off'

    Args:
        key: Environment variable name
        default: Value to return if not set or unrecognized

    Returns:
        Parsed boolean or default value
    """
    val = os.environ.get(key, "").lower()
    if val in ("1", "true", "yes", "on"):
        return True
    if val in ("0", "false", "no", "off"):
        return False
    return default


@dataclass
class Config:
    """Application configuration loaded from environment variables.

    Use Config.load() to create an instance with values from the environment,
    or construct one directly with substituted values in tests.

    Example:
        >>> config = Config.load()
        >>> if error := config.validate():
        ...     print(f"Config error: {error}")
    """

    # === Collector (Perplexity) ===
    perplexity_api_key: str = ""  # PERPLEXITY_API_KEY
    perplexity_base_url: str = DEFAULT_PERPLEXITY_BASE_URL  # PERPLEXITY_BASE_URL
    collector_model: str = "sonar-pro"  # COLLECTOR_MODEL

    # === Summarizer (OpenAI) ===
    openai_api_key: str = ""  # OPENAI_API_KEY
    openai_base_url: str = DEFAULT_OPENAI_BASE_URL  # OPENAI_BASE_URL
    summary_model: str = "gpt-4o-mini"  # SUMMARY_MODEL

    # === Document Store (Appwrite) ===
    appwrite_endpoint: str = DEFAULT_APPWRITE_ENDPOINT  # APPWRITE_ENDPOINT
    appwrite_project_id: str = ""  # APPWRITE_PROJECT_ID
    appwrite_api_key: str = ""  # APPWRITE_API_KEY
    appwrite_db_id: str = ""  # APPWRITE_DB_ID
    appwrite_collection_id: str = ""  # APPWRITE_COLLECTION_ID

    # === Publisher (Telegram) ===
    telegram_bot_token: str = ""  # TELEGRAM_BOT_TOKEN
    telegram_channel_id: str = ""  # TELEGRAM_CHANNEL_ID
    telegram_api_base: str = DEFAULT_TELEGRAM_API_BASE  # TELEGRAM_API_BASE
    telegram_disable_preview: bool = False  # TELEGRAM_DISABLE_PREVIEW

    # === Output Settings ===
    language: str = "fa"  # LANGUAGE - 'fa' (Persian) or 'en' (English)
    timezone: str = "Asia/Tehran"  # REPORT_TIMEZONE

    # === Pipeline Behavior ===
    poll_interval_seconds: int = 86400  # POLL_INTERVAL_SECONDS - Delay between runs

    # === Logging Configuration ===
    log_dir: Path = field(default_factory=lambda: Path("log"))  # LOG_DIR
    log_level: str = "INFO"  # LOG_LEVEL - DEBUG, INFO, WARNING, ERROR
    log_backup_count: int = 30  # LOG_BACKUP_COUNT - Number of rotated logs to keep
    log_max_bytes: int = 0  # LOG_MAX_BYTES - Max file size (0 = time-based rotation)
    log_format: str = "text"  # LOG_FORMAT - 'text' or 'json' for structured logging

    # === Optional: Observability ===
    # Requires: pip install logfire
    enable_logfire: bool = False  # ENABLE_LOGFIRE - Enable distributed tracing
    logfire_token: str = ""  # LOGFIRE_TOKEN - Authentication token

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            perplexity_api_key=_env("PERPLEXITY_API_KEY"),
            perplexity_base_url=_env("PERPLEXITY_BASE_URL", DEFAULT_PERPLEXITY_BASE_URL),
            collector_model=_env("COLLECTOR_MODEL", "sonar-pro"),
            openai_api_key=_env("OPENAI_API_KEY"),
            openai_base_url=_env("OPENAI_BASE_URL", DEFAULT_OPENAI_BASE_URL),
            summary_model=_env("SUMMARY_MODEL", "gpt-4o-mini"),
            appwrite_endpoint=_env("APPWRITE_ENDPOINT", DEFAULT_APPWRITE_ENDPOINT),
            appwrite_project_id=_env("APPWRITE_PROJECT_ID"),
            appwrite_api_key=_env("APPWRITE_API_KEY"),
            appwrite_db_id=_env("APPWRITE_DB_ID"),
            appwrite_collection_id=_env("APPWRITE_COLLECTION_ID"),
            telegram_bot_token=_env("TELEGRAM_BOT_TOKEN"),
            telegram_channel_id=_env("TELEGRAM_CHANNEL_ID"),
            telegram_api_base=_env("TELEGRAM_API_BASE", DEFAULT_TELEGRAM_API_BASE),
            telegram_disable_preview=_env_bool("TELEGRAM_DISABLE_PREVIEW", False),
            language=_env("LANGUAGE", "fa").lower(),
            timezone=_env("REPORT_TIMEZONE", "Asia/Tehran"),
            poll_interval_seconds=_env_int("POLL_INTERVAL_SECONDS", 86400),
            log_dir=Path(_env("LOG_DIR", "log")),
            log_level=_env("LOG_LEVEL", "INFO").upper(),
            log_backup_count=_env_int("LOG_BACKUP_COUNT", 30),
            log_max_bytes=_env_int("LOG_MAX_BYTES", 0),
            log_format=_env("LOG_FORMAT", "text").lower(),
            enable_logfire=_env_bool("ENABLE_LOGFIRE", False),
            logfire_token=_env("LOGFIRE_TOKEN"),
        )

    def validate(self) -> str | None:
        """Validate configuration for required fields and valid values.

        Checks:
            - All credentials and destination ids are set
            - Language is 'fa' or 'en'
            - Timezone is a known IANA zone
            - Numeric values are in range

        Returns:
            Error message string if invalid, None if valid.
        """
        required = {
            "PERPLEXITY_API_KEY": self.perplexity_api_key,
            "OPENAI_API_KEY": self.openai_api_key,
            "APPWRITE_PROJECT_ID": self.appwrite_project_id,
            "APPWRITE_API_KEY": self.appwrite_api_key,
            "APPWRITE_DB_ID": self.appwrite_db_id,
            "APPWRITE_COLLECTION_ID": self.appwrite_collection_id,
            "TELEGRAM_BOT_TOKEN": self.telegram_bot_token,
            "TELEGRAM_CHANNEL_ID": self.telegram_channel_id,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            return f"Missing required environment variables: {', '.join(missing)}"
        if self.language not in SUPPORTED_LANGUAGES:
            return f"Invalid LANGUAGE '{self.language}' - must be 'fa' or 'en'"
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            return f"Invalid REPORT_TIMEZONE '{self.timezone}'"
        if self.poll_interval_seconds <= 0:
            return "POLL_INTERVAL_SECONDS must be positive"
        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            return f"Invalid LOG_LEVEL '{self.log_level}' - must be DEBUG, INFO, WARNING, ERROR, or CRITICAL"
        if self.log_format not in ("text", "json"):
            return f"Invalid LOG_FORMAT '{self.log_format}' - must be 'text' or 'json'"
        if self.log_backup_count < 0:
            return "LOG_BACKUP_COUNT must be non-negative"
        if self.log_max_bytes < 0:
            return "LOG_MAX_BYTES must be non-negative"
        return None

    def redacted(self) -> dict[str, object]:
        """Return a display-safe view of the configuration (secrets masked)."""

        def mask(value: str) -> str:
            if not value:
                return ""
            return value[:4] + "***" if len(value) > 8 else "***"

        return {
            "language": self.language,
            "timezone": self.timezone,
            "collector": {
                "base_url": self.perplexity_base_url,
                "model": self.collector_model,
                "api_key": mask(self.perplexity_api_key),
            },
            "summarizer": {
                "base_url": self.openai_base_url,
                "model": self.summary_model,
                "api_key": mask(self.openai_api_key),
            },
            "store": {
                "endpoint": self.appwrite_endpoint,
                "project_id": self.appwrite_project_id,
                "database_id": self.appwrite_db_id,
                "collection_id": self.appwrite_collection_id,
                "api_key": mask(self.appwrite_api_key),
            },
            "publisher": {
                "api_base": self.telegram_api_base,
                "channel_id": self.telegram_channel_id,
                "disable_preview": self.telegram_disable_preview,
                "bot_token": mask(self.telegram_bot_token),
            },
            "poll_interval": self.poll_interval_seconds,
            "enable_logfire": self.enable_logfire,
        }

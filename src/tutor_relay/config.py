"""Application configuration using Pydantic settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Mistral API (empty key is allowed at startup, reported as a warning)
    mistral_api_key: str = Field(
        "", alias="MISTRAL_API_KEY",
        description="Bearer credential for the Mistral chat completions API.",
    )
    mistral_api_url: str = Field(
        "https://api.mistral.ai/v1", alias="MISTRAL_API_URL",
        description="Base URL of the OpenAI-compatible Mistral API. /chat/completions is appended.",
    )
    mistral_model: str = Field(
        "mistral-medium", alias="MISTRAL_MODEL",
        description="Model identifier sent with every completion request.",
    )
    mistral_timeout: float = Field(
        60.0, alias="MISTRAL_TIMEOUT",
        description="HTTP request timeout in seconds for Mistral calls.",
    )

    # Prompting
    intent_keywords_path: str = Field(
        "", alias="INTENT_KEYWORDS_PATH",
        description="Path to a YAML file replacing the built-in modification keyword table. Empty = built-in.",
    )

    # Server
    host: str = Field(
        "0.0.0.0", alias="HOST",
        description="Host address to bind the aiohttp server to.",
    )
    port: int = Field(
        4444, alias="PORT",
        description="Port number for the aiohttp server.",
    )
    cors_origin: str = Field(
        "http://localhost:5555", alias="CORS_ORIGIN",
        description="Browser origin allowed to call the API. Empty = CORS headers disabled.",
    )

    # Logging
    log_level: str = Field(
        "INFO", alias="LOG_LEVEL",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, or CRITICAL.",
    )
    log_file: str = Field(
        "", alias="LOG_FILE",
        description="Path to log file for file-based logging with rotation. Empty = console only.",
    )
    log_file_max_bytes: int = Field(
        10_485_760, alias="LOG_FILE_MAX_BYTES",
        description="Max size in bytes per log file before rotation. Default: 10 MB.",
    )
    log_file_backup_count: int = Field(
        5, alias="LOG_FILE_BACKUP_COUNT",
        description="Number of rotated backup log files to keep.",
    )


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()

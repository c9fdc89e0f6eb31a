from urllib.parse import urlparse

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


VALID_ENVIRONMENTS = ("development", "production", "test")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below

    Settings are read once at startup and never mutated afterwards,
    so a single instance can be shared by every request thread.
    """

    # Environment
    environment: str = "development"
    debug: bool = False

    # Application
    app_name: str = "Shortlink Service"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Database
    database_url: str = "sqlite:///./shortlink.db"
    store_backend: str = "sql"  # Options: "sql", "memory"

    # Identifier allocation
    base_url: str = "http://127.0.0.1:8000"
    short_id_length: int = 8
    max_attempts: int = 5

    # Rate limiting (POST /shorten only)
    rate_limit_backend: str = "redis"  # Options: "redis", "memory", "null"
    redis_url: str = "redis://localhost:6379/0"
    rate_limit_max: int = 100
    rate_limit_window_seconds: int = 900  # 15 minutes

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def check_environment(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in VALID_ENVIRONMENTS:
            raise ValueError(
                f"environment must be one of {', '.join(VALID_ENVIRONMENTS)}, got {value!r}"
            )
        return value

    @field_validator("base_url")
    @classmethod
    def check_base_url(cls, value: str) -> str:
        value = value.strip()
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"base_url must be a valid http(s) URL, got {value!r}")
        # shortUrl is built as base_url + "/" + short_id
        return value.rstrip("/")

    @field_validator("port")
    @classmethod
    def check_port(cls, value: int) -> int:
        if not 1 <= value <= 65535:
            raise ValueError(f"port must be between 1 and 65535, got {value}")
        return value

    @field_validator("short_id_length")
    @classmethod
    def check_short_id_length(cls, value: int) -> int:
        if not 1 <= value <= 50:
            raise ValueError(f"short_id_length must be between 1 and 50, got {value}")
        return value

    @field_validator("max_attempts", "rate_limit_max", "rate_limit_window_seconds")
    @classmethod
    def check_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError(f"value must be a positive integer, got {value}")
        return value

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_test(self) -> bool:
        return self.environment == "test"


# Create settings instance
settings = Settings()

"""Application settings loaded from environment variables.

Environment Configuration:
    DOCSPACE_ENV: Deployment environment (local | test | prod)
    DOCSPACE_DATA_PATH: Path of the JSON document backing the store
    API_PREFIX: Optional path prefix for every route (e.g. "/api")
    CORS_ORIGINS: Comma-separated list of allowed browser origins ("*" for any)
    LOG_JSON: Emit JSON logs (true) or console-friendly logs (false)
    LOG_LEVEL: Root log level (DEBUG | INFO | WARNING | ERROR)

Search Configuration:
    SEARCH_DEFAULT_LIMIT: Page size when the client does not send one
    SEARCH_MAX_LIMIT: Upper clamp for the client-supplied page size
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class Environment(str, Enum):
    """Valid deployment environments."""

    LOCAL = "local"
    TEST = "test"
    PROD = "prod"


class Settings(BaseSettings):
    """Application configuration.

    Settings are loaded from environment variables.
    Validation rules:
    - API_PREFIX must be empty or start with "/" (trailing slash stripped)
    - SEARCH_DEFAULT_LIMIT must not exceed SEARCH_MAX_LIMIT
    - LOG_LEVEL must name a standard logging level
    """

    docspace_env: Environment = Field(default=Environment.LOCAL, alias="DOCSPACE_ENV")
    data_path: Path = Field(default=Path("data/db.json"), alias="DOCSPACE_DATA_PATH")
    api_prefix: str = Field(default="", alias="API_PREFIX")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")
    log_json: bool = Field(default=True, alias="LOG_JSON")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    search_default_limit: int = Field(default=20, ge=1, alias="SEARCH_DEFAULT_LIMIT")
    search_max_limit: int = Field(default=100, ge=1, alias="SEARCH_MAX_LIMIT")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Normalize the route prefix and log level, check search limits."""
        prefix = self.api_prefix.strip()
        if prefix and not prefix.startswith("/"):
            raise ValueError(f"API_PREFIX must start with '/': {prefix!r}")
        self.api_prefix = prefix.rstrip("/")

        self.log_level = self.log_level.strip().upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(LOG_LEVELS)}: {self.log_level!r}")

        if self.search_default_limit > self.search_max_limit:
            raise ValueError(
                "SEARCH_DEFAULT_LIMIT must be <= SEARCH_MAX_LIMIT "
                f"({self.search_default_limit} > {self.search_max_limit})"
            )

        return self

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings instance loaded from environment.

    Raises:
        ValidationError: If settings are invalid.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache. Useful for testing."""
    get_settings.cache_clear()

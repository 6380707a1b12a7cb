"""
Application configuration using Pydantic settings.

Configuration is loaded from environment variables (prefixed FITCRM_) and
an optional .env file, with defaults that work out of the box on a single
machine.

Mock modes enable local development without a data directory or network.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables, e.g.
    FITCRM_DATA_DIR=/var/lib/fitcrm.
    """

    # API Configuration
    api_title: str = "FitCRM API"
    api_version: str = "v1"

    # Storage Configuration
    data_dir: str = Field(
        default="data",
        description="Directory holding the JSON files for persisted clients."
    )
    storage_key: str = Field(
        default="fitcrm_clients",
        description="Key the client list is stored under. Also the JSON file name."
    )
    storage_mock_mode: bool = Field(
        default=False,
        description="Keep clients in memory instead of on disk. Data is lost on restart."
    )

    # Exercise API Configuration
    exercise_api_url: str = Field(
        default="https://wger.de/api/v2/exercise/",
        description="wger exercise endpoint used for suggestions"
    )
    exercise_language: int = Field(
        default=2,
        description="wger language id (2 is English)"
    )
    exercise_limit: int = Field(
        default=5,
        ge=1,
        description="Number of suggestions shown on a client's detail view"
    )
    exercise_preview_length: int = Field(
        default=100,
        ge=0,
        description="Maximum characters of each exercise description preview"
    )
    exercise_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout for the exercise request"
    )
    exercise_mock_mode: bool = Field(
        default=False,
        description="Serve canned suggestions instead of calling wger"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:8000",
        description="Comma-separated list of allowed CORS origins. Use * for development only."
    )

    model_config = SettingsConfigDict(
        env_prefix="FITCRM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def validate_required_fields(self) -> list[str]:
        """
        Return the settings that are missing for the selected modes.

        Requirements depend on mock mode, so this is separate from
        Pydantic's own validation.
        """
        missing = []

        if not self.storage_key:
            missing.append("FITCRM_STORAGE_KEY")

        if not self.storage_mock_mode and not self.data_dir:
            missing.append("FITCRM_DATA_DIR")

        if not self.exercise_mock_mode and not self.exercise_api_url:
            missing.append("FITCRM_EXERCISE_API_URL")

        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once per process. For tests, call
    get_settings.cache_clear() or pass a Settings to create_app().
    """
    return Settings()

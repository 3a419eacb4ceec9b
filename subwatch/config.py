"""
Application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_name: str = "Subwatch"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./data/db.sqlite"

    # Detection tuning
    similarity_threshold: float = 0.90  # Jaro-Winkler score to reuse a known merchant key
    dispersion_ratio: float = 0.3  # stddev must stay below this fraction of the mean gap
    min_mean_interval_days: int = 5
    max_mean_interval_days: int = 400

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    frontend_url: str = "http://localhost:5173"

    model_config = SettingsConfigDict(
        env_prefix="SUBWATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()

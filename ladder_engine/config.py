"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "ladder-engine"
    log_level: str = "INFO"

    # Calculation defaults
    default_tax_rate: float = 0.2  # Final withholding tax on deposit interest


settings = Settings()

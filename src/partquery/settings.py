"""Settings for partquery."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class PartQuerySettings(BaseSettings):
    """partquery configuration settings."""

    LOG_LEVEL: str = "INFO"

    # Emit every compiled structured query at DEBUG level
    QUERY_LOG_COMPILED: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = PartQuerySettings()

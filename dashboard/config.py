# dashboard/config.py

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Runtime settings, read from the environment (or a local .env file).

    POSTGRES_URL is the only connection setting; the storage client owns
    everything else about the connection.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field("Invoice Dashboard API", description="Application title")
    postgres_url: str = Field(
        "sqlite:///db.sqlite",
        description="SQLAlchemy URL of the dashboard database",
    )
    log_level: str = Field("INFO", description="Root logging level")


@lru_cache
def get_settings() -> Settings:
    return Settings()

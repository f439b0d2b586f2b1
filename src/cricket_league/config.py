"""Configuration management for the cricket league system."""

from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Load environment from .env if present
load_dotenv(override=False)


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    url: str = Field(default="sqlite:///cricket_league.db", alias="DATABASE_URL")
    pool_size: int = Field(default=5, alias="DB_POOL_SIZE")
    pool_recycle: int = Field(default=3600, alias="DB_POOL_RECYCLE")
    pool_pre_ping: bool = Field(default=True, alias="DB_POOL_PRE_PING")
    connect_timeout: int = Field(default=10, alias="DB_CONNECT_TIMEOUT")
    echo: bool = Field(default=False, alias="DB_ECHO")  # Set to True for SQL debugging
    retry_attempts: int = Field(default=3, ge=1, alias="DB_RETRY_ATTEMPTS")
    retry_wait_max: float = Field(default=2.0, ge=0, alias="DB_RETRY_WAIT_MAX")

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured store is SQLite."""
        return self.url.startswith("sqlite")


class IdSettings(BaseSettings):
    """Identifier allocation settings."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    max_attempts: int = Field(default=3, ge=1, alias="ID_MAX_ATTEMPTS")


class ScorecardSettings(BaseSettings):
    """Scorecard upsert behaviour."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    # False only logs a failed match back-reference update instead of failing the upsert
    strict_backref: bool = Field(default=True, alias="SCORECARD_STRICT_BACKREF")


class AuthSettings(BaseSettings):
    """Default admin account created at startup."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    admin_username: str = Field(default="admin", alias="ADMIN_USERNAME")
    admin_password: str = Field(default="password", alias="ADMIN_PASSWORD")
    admin_email: Optional[str] = Field(default="admin@example.com", alias="ADMIN_EMAIL")


class ApiSettings(BaseSettings):
    """HTTP API settings."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    host: str = Field(default="0.0.0.0", alias="API_HOST")
    port: int = Field(default=3001, alias="API_PORT")
    cors_origins_csv: str = Field(default="*", alias="CORS_ORIGINS")

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_origins_csv.split(",") if o.strip()]


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    level: str = Field(default="INFO", alias="LOG_LEVEL")
    file: Optional[str] = Field(default=None, alias="LOG_FILE")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    ids: IdSettings = Field(default_factory=IdSettings)
    scorecards: ScorecardSettings = Field(default_factory=ScorecardSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    seed_sample_data: bool = Field(default=False, alias="SEED_SAMPLE_DATA")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings loaded from the environment."""
    return Settings()

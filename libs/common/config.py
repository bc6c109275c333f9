from functools import lru_cache
from typing import Literal, Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

# Async driver used for every PostgreSQL connection
ASYNC_DRIVERS = {
    "postgres": "postgresql+psycopg",
    "postgresql": "postgresql+psycopg",
}


class ConfigValidationError(RuntimeError):
    """Raised when the process environment does not satisfy Settings."""


class Settings(BaseSettings):
    """Global application settings, read once from the environment."""

    # Application
    NODE_ENV: Literal["development", "production", "test", "staging"]
    PORT: int = 8080
    HOST: str
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE: str
    TEST_DB: str = "events_test_db"
    DATABASE_DIALECT: str = "postgres"
    DATABASE_USER: str
    DATABASE_PASSWORD: Optional[str] = None
    DATABASE_PORT: int = 5432
    DATABASE_URL: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", frozen=True
    )

    @field_validator("DATABASE_URL")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str):
            for prefix in ("postgres://", "postgresql://"):
                if v.startswith(prefix):
                    return v.replace(prefix, "postgresql+psycopg://", 1)
        return v

    @property
    def is_test(self) -> bool:
        return self.NODE_ENV == "test"

    @property
    def database_name(self) -> str:
        """Database the process talks to; the test database under NODE_ENV=test."""
        return self.TEST_DB if self.is_test else self.DATABASE

    @property
    def database_url(self) -> str:
        """
        Connection URL for the async engine.

        DATABASE_URL wins when set; otherwise the URL is assembled from the
        individual DATABASE_* variables and HOST.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL

        drivername = ASYNC_DRIVERS.get(
            self.DATABASE_DIALECT.lower(), self.DATABASE_DIALECT
        )
        url = URL.create(
            drivername,
            username=self.DATABASE_USER,
            password=self.DATABASE_PASSWORD,
            host=self.HOST,
            port=self.DATABASE_PORT,
            database=self.database_name,
        )
        return url.render_as_string(hide_password=False)


def load_settings() -> Settings:
    """
    Build Settings from the environment.

    Raises:
        ConfigValidationError: required variables are missing or malformed.
    """
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigValidationError(f"Config validation error: {exc}") from exc


@lru_cache
def get_settings() -> Settings:
    """
    Return the global settings instance, cached.
    """
    return load_settings()

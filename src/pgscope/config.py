"""Application configuration from environment variables."""

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_url: str = Field(
        default="",
        description="libpq conninfo or URL; empty uses libpq defaults and PG* env vars",
    )
    db_http_methods: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "PATCH", "DELETE"],
        description="HTTP methods that get a per-request connection",
    )
    exit_on_connection_failure: bool = Field(
        default=False,
        description="Send SIGTERM to the process on network, credential or capacity errors",
    )

    # Application
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment name",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "console"] = Field(
        default="json", description="Log renderer"
    )
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, description="Bind port")

    def middleware_options(self) -> dict[str, Any]:
        """Partial options for create_db_middleware()."""
        return {
            "http_methods": self.db_http_methods,
            "connection_options": self.database_url,
            "exit_on_connection_failure": self.exit_on_connection_failure,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""Configuration management for the text table store."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageConfig(BaseModel):
    """Storage configuration."""

    database_path: Path = Field(
        default=Path("data/database.tdb"), description="Primary database file path"
    )
    snapshot_dir: Path | None = Field(
        default=None,
        description="Directory for transaction snapshots (system temp dir if unset)",
    )
    encoding: str = Field(default="utf-8", min_length=1, description="Text encoding of the store")


class ServerConfig(BaseModel):
    """REST server configuration."""

    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")
    metrics_port: int = Field(default=8001, ge=1, le=65535, description="Prometheus metrics port")


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="text_db", description="Service name for tracing")


class Config(BaseSettings):
    """Main configuration for the text table store."""

    model_config = SettingsConfigDict(
        env_prefix="TEXT_DB_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    storage: StorageConfig = Field(default_factory=StorageConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    def ensure_directories(self) -> None:
        """Ensure the database and snapshot directories exist."""
        self.storage.database_path.parent.mkdir(parents=True, exist_ok=True)
        if self.storage.snapshot_dir is not None:
            self.storage.snapshot_dir.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    config = Config()
    config.ensure_directories()
    return config

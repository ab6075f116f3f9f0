"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./users.db",
        description="Database connection URL",
    )
    echo: bool = Field(default=False, description="Echo SQL statements")

    @computed_field
    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @computed_field
    @property
    def is_in_memory(self) -> bool:
        """True for SQLite URLs that never touch the filesystem."""
        return self.is_sqlite and (
            self.url in ("sqlite://", "sqlite:///:memory:") or ":memory:" in self.url
        )


class UsersConfig(BaseModel):
    """Registration rules for users."""

    min_age_for_registration: int = Field(
        default=18,
        ge=0,
        description="Minimum age in whole years a user must have reached to register",
    )


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    users: UsersConfig = Field(
        default_factory=UsersConfig, description="User registration rules"
    )

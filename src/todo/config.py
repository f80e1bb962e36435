"""Configuration management for the todo application."""

import logging
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables
load_dotenv()


class Settings(BaseSettings):
    """Application settings using Pydantic BaseSettings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Elasticsearch Configuration
    elasticsearch_host: str = Field(default="localhost")
    elasticsearch_port: int = Field(default=9200, ge=1, le=65535)
    elasticsearch_scheme: Literal["http", "https"] = Field(default="http")
    elasticsearch_index: str = Field(default="todo", min_length=1)
    elasticsearch_user: str = Field(default="")
    elasticsearch_password: str = Field(default="")
    elasticsearch_verify_certs: bool = Field(default=True)
    request_timeout: int = Field(default=30, ge=1)
    max_retries: int = Field(default=3, ge=0)

    # Application Configuration
    list_size: int = Field(default=100, ge=1, le=10000)
    log_level: str = Field(default="WARNING")

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level

    @field_validator("elasticsearch_index")
    @classmethod
    def _validate_index(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("index name cannot be blank")
        return value.strip()

    @property
    def elasticsearch_url(self) -> str:
        """Get Elasticsearch URL."""
        return f"{self.elasticsearch_scheme}://{self.elasticsearch_host}:{self.elasticsearch_port}"

    @property
    def has_credentials(self) -> bool:
        return bool(self.elasticsearch_user and self.elasticsearch_password)

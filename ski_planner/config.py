"""Configuration management for Ski Planner."""
import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # AWS Bedrock
    aws_bearer_token_bedrock: str = ""
    aws_region: str = "eu-central-1"
    aws_bedrock_model: str = "eu.amazon.nova-lite-v1:0"  # Nova Lite inference profile

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8080

    # "server" runs the HTTP API, "demo" runs the interactive CLI
    app_mode: str = "server"

    # Reported by the health endpoint
    environment: str = "development"
    app_version: str = "1.0.0"

    # Logging
    log_level: str = "INFO"
    log_file: str = ""

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "allow"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Map aliases such as WARN or FATAL to their canonical logging level names."""
        level = logging.getLevelName(str(v).strip().upper())
        if not isinstance(level, int) or level == logging.NOTSET:
            raise ValueError(f"Unknown log level: {v!r}")
        return logging.getLevelName(level)

    @property
    def has_bedrock_credentials(self) -> bool:
        return bool(self.aws_bearer_token_bedrock.strip())


# Global settings instance
settings = Settings()

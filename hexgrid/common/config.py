"""
Configuration management for the HexGrid API service.

This module provides centralized configuration loading and validation using Pydantic.
All environment variables are loaded and validated at startup.
"""

import os
from typing import Optional, List
from pydantic import BaseModel, Field, field_validator
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class ServerConfig(BaseModel):
    """HTTP listener configuration."""

    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=3000, description="Port to listen on")
    cors_allow_origins: List[str] = Field(
        default=["*"], description="Origins allowed by the CORS middleware"
    )

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        """Ensure the port is a usable TCP port."""
        if not (1 <= v <= 65535):
            raise ValueError(f"Port must be between 1 and 65535, got {v}")
        return v


class H3Config(BaseModel):
    """H3 request defaults and limits."""

    default_resolution: int = Field(
        default=7, description="Resolution used by /cell when res is omitted"
    )
    max_k: int = Field(default=10, description="Largest k accepted for neighbor rings")

    @field_validator("default_resolution")
    @classmethod
    def validate_resolution(cls, v):
        """Validate resolution range."""
        if not (0 <= v <= 15):
            raise ValueError(f"H3 resolution must be between 0 and 15, got {v}")
        return v

    @field_validator("max_k")
    @classmethod
    def validate_max_k(cls, v):
        if v < 0:
            raise ValueError(f"max_k must be non-negative, got {v}")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Logging level")
    format_str: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )
    enable_structured_logging: bool = Field(
        default=True, description="Enable structured JSON logging"
    )


class AppConfig(BaseModel):
    """Main application configuration."""

    server: ServerConfig
    h3: H3Config
    logging: LoggingConfig

    # Environment
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")


def _parse_origins(raw: str) -> List[str]:
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


def load_config(env_file: Optional[str] = None) -> AppConfig:
    """
    Load and validate configuration from environment variables.

    Args:
        env_file: Optional path to a .env file whose values override the
            current environment

    Returns:
        Validated application configuration
    """
    if env_file:
        if not os.path.exists(env_file):
            raise ValueError(f"Configuration file not found: {env_file}")
        load_dotenv(env_file, override=True)

    try:
        config_dict = {
            "server": {
                "host": os.getenv("HOST", "0.0.0.0"),
                "port": int(os.getenv("PORT", "3000")),
                "cors_allow_origins": _parse_origins(
                    os.getenv("CORS_ALLOW_ORIGINS", "*")
                ),
            },
            "h3": {
                "default_resolution": int(os.getenv("DEFAULT_RESOLUTION", "7")),
                "max_k": int(os.getenv("MAX_K", "10")),
            },
            "logging": {
                "level": os.getenv("LOG_LEVEL", "INFO"),
                "enable_structured_logging": os.getenv(
                    "ENABLE_STRUCTURED_LOGGING", "true"
                ).lower()
                == "true",
            },
            "environment": os.getenv("ENVIRONMENT", "development"),
            "debug": os.getenv("DEBUG", "false").lower() == "true",
        }
    except ValueError:
        raise ValueError("PORT, DEFAULT_RESOLUTION and MAX_K must be integers")

    return AppConfig(**config_dict)


# Global configuration instance
config = load_config()

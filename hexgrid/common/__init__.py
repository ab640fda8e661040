"""
Common utilities for the HexGrid API service.

This package provides shared configuration, logging, and error types used
across the grid adapter and the HTTP layer.
"""

from .config import config, AppConfig, load_config
from .logging import (
    logger,
    get_logger,
    setup_logging,
    TimedLogger,
    log_http_request,
    log_grid_operation,
    set_log_level,
)
from .errors import (
    HexGridError,
    InvalidInput,
    MissingParameters,
    NotFound,
    InternalError,
)

__all__ = [
    "config",
    "AppConfig",
    "load_config",
    "logger",
    "get_logger",
    "setup_logging",
    "TimedLogger",
    "log_http_request",
    "log_grid_operation",
    "set_log_level",
    "HexGridError",
    "InvalidInput",
    "MissingParameters",
    "NotFound",
    "InternalError",
]

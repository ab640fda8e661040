"""
HexGrid API package.

A small HTTP service that converts coordinates to H3 cells and reports
cell geometry, metadata and neighbor rings:
- Common utilities (config, logging, error taxonomy)
- H3 adapter and k-ring neighbor lookup
- FastAPI application with request validation and response formatting
"""

# Re-export key components for convenience
from .common import config, logger, get_logger
from .h3 import H3GridAdapter, H3NeighborDiscovery
from .api import create_app

__version__ = "1.0.0"

__all__ = [
    # Configuration and logging
    "config",
    "logger",
    "get_logger",
    # H3 utilities
    "H3GridAdapter",
    "H3NeighborDiscovery",
    # HTTP
    "create_app",
]

"""
HTTP layer for the HexGrid API service.

This package provides request validation, response formatting and the
FastAPI application that ties them to the H3 adapter.
"""

from .validation import (
    CoordinateQuery,
    RingQuery,
    validate_coordinate_query,
    validate_ring_query,
)
from .app import app, create_app

__all__ = [
    "CoordinateQuery",
    "RingQuery",
    "validate_coordinate_query",
    "validate_ring_query",
    "app",
    "create_app",
]

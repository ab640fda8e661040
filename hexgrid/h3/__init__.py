"""
H3 hexagonal grid utilities for the HexGrid API service.

This package wraps the h3 library for cell conversion, cell geometry and
metadata, and k-ring neighbor lookup.
"""

from .grid import (
    H3GridAdapter,
    CellSummary,
    get_grid_adapter,
    latlng_to_cell,
)

from .neighbors import (
    H3NeighborDiscovery,
    NeighborResult,
    get_neighbor_discovery,
    get_cell_neighbors,
)

__all__ = [
    "H3GridAdapter",
    "CellSummary",
    "get_grid_adapter",
    "latlng_to_cell",
    "H3NeighborDiscovery",
    "NeighborResult",
    "get_neighbor_discovery",
    "get_cell_neighbors",
]

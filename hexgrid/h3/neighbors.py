"""
H3 neighbor lookup for the HexGrid API service.

Provides grid-disk (k-ring) expansion around a cell, bounded by the
configured maximum k.
"""

import h3
from typing import List, Optional
from dataclasses import dataclass, field

from ..common import config, get_logger, log_grid_operation, InternalError

logger = get_logger("h3.neighbors")


@dataclass
class NeighborResult:
    """Cells within k grid steps of a center cell."""

    center: str
    k: int
    neighbors: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.neighbors)


class H3NeighborDiscovery:
    """Discovers H3 cells within k grid steps of an origin cell."""

    def __init__(self, max_k: Optional[int] = None):
        """
        Initialize neighbor discovery.

        Args:
            max_k: Largest k accepted (defaults to configuration)
        """
        self.max_k = config.h3.max_k if max_k is None else max_k
        self.logger = logger

    def get_k_ring_neighbors(self, h3_index: str, k: int) -> List[str]:
        """
        Get all H3 cells within k grid steps of the origin cell.

        The origin is always included, so k=0 yields just the origin and
        k=1 on a hexagon yields seven cells.

        Args:
            h3_index: Origin H3 cell index
            k: Grid distance

        Returns:
            List of H3 cell indexes in library order
        """
        if not (0 <= k <= self.max_k):
            raise ValueError(f"k must be between 0 and {self.max_k}, got {k}")

        try:
            return list(h3.grid_disk(h3_index, k))
        except Exception as e:
            self.logger.error(
                f"Error getting k-ring neighbors for {h3_index} at k={k}: {e}",
                extra=log_grid_operation("grid_disk", h3_index=h3_index, k=k),
            )
            raise InternalError(str(e) or "H3 grid_disk failed") from e

    def get_neighbors(self, h3_index: str, k: int) -> NeighborResult:
        """Get the k-ring around a cell packaged with its center and k."""
        return NeighborResult(
            center=h3_index, k=k, neighbors=self.get_k_ring_neighbors(h3_index, k)
        )


# Convenience functions
def get_neighbor_discovery(max_k: Optional[int] = None) -> H3NeighborDiscovery:
    """Get neighbor discovery instance with default or specified k limit."""
    return H3NeighborDiscovery(max_k=max_k)


def get_cell_neighbors(h3_index: str, k: int = 1) -> List[str]:
    """Get the k-ring around a cell using the configured k limit."""
    return get_neighbor_discovery().get_k_ring_neighbors(h3_index, k)

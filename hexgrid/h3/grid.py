"""
H3 grid adapter for the HexGrid API service.

Thin pass-through over the h3 library: coordinate to cell conversion, cell
centers and boundaries, and per-cell metadata. Any error raised by the
library is logged and re-raised as InternalError.
"""

import h3
from typing import Any, Callable, List, Tuple
from shapely.geometry import Polygon, Point
from dataclasses import dataclass

from ..common import get_logger, log_grid_operation, InternalError

logger = get_logger("h3.grid")


def unwrap_longitude(lng: float, reference_lng: float) -> float:
    """Shift a longitude by whole turns until it is within 180 degrees of the reference."""
    while lng - reference_lng > 180.0:
        lng -= 360.0
    while lng - reference_lng < -180.0:
        lng += 360.0
    return lng


@dataclass
class CellSummary:
    """Everything the API reports about a single cell."""

    h3_index: str
    center: Tuple[float, float]
    boundary: List[Tuple[float, float]]
    is_pentagon: bool
    base_cell_number: int
    is_res_class_iii: bool


class H3GridAdapter:
    """Wraps the h3 library calls used by the HTTP layer."""

    def __init__(self):
        self.logger = logger

    def _call(self, operation: str, func: Callable[..., Any], *args) -> Any:
        try:
            return func(*args)
        except Exception as e:
            self.logger.error(
                f"H3 {operation} failed for {args}: {e}",
                extra=log_grid_operation(operation, args=[str(a) for a in args]),
            )
            raise InternalError(str(e) or f"H3 {operation} failed") from e

    def latlng_to_cell(self, lat: float, lng: float, resolution: int) -> str:
        """
        Convert latitude/longitude to an H3 cell index.

        Args:
            lat: Latitude in degrees
            lng: Longitude in degrees
            resolution: H3 resolution level (0-15)

        Returns:
            H3 cell index string
        """
        return self._call("latlng_to_cell", h3.latlng_to_cell, lat, lng, resolution)

    def cell_to_latlng(self, h3_index: str) -> Tuple[float, float]:
        """
        Get the center of an H3 cell.

        Args:
            h3_index: H3 cell index string

        Returns:
            Tuple of (latitude, longitude)
        """
        return tuple(self._call("cell_to_latlng", h3.cell_to_latlng, h3_index))

    def cell_to_boundary(self, h3_index: str) -> List[Tuple[float, float]]:
        """
        Get boundary vertices for an H3 cell.

        Args:
            h3_index: H3 cell index string

        Returns:
            List of (latitude, longitude) tuples, not closed
        """
        boundary = self._call("cell_to_boundary", h3.cell_to_boundary, h3_index)
        return [(lat, lng) for lat, lng in boundary]

    def cell_to_polygon(self, h3_index: str) -> Polygon:
        """
        Shapely polygon of the cell in (lng, lat) axis order.

        Vertex longitudes are unwrapped to within 180 degrees of the cell
        center, so cells crossing the antimeridian may extend past +/-180.
        """
        _, center_lng = self.cell_to_latlng(h3_index)
        return Polygon(
            [
                (unwrap_longitude(lng, center_lng), lat)
                for lat, lng in self.cell_to_boundary(h3_index)
            ]
        )

    def cell_to_geojson_ring(self, h3_index: str) -> List[List[float]]:
        """
        Get the cell boundary as a closed GeoJSON linear ring.

        Args:
            h3_index: H3 cell index string

        Returns:
            List of [longitude, latitude] pairs whose last vertex repeats the first
        """
        polygon = self.cell_to_polygon(h3_index)
        return [[lng, lat] for lng, lat in polygon.exterior.coords]

    def cell_contains(self, h3_index: str, lat: float, lng: float) -> bool:
        """Check whether a point lies inside the cell's boundary polygon."""
        polygon = self.cell_to_polygon(h3_index)
        _, center_lng = self.cell_to_latlng(h3_index)
        return polygon.contains(Point(unwrap_longitude(lng, center_lng), lat))

    def is_valid_cell(self, h3_index: str) -> bool:
        """
        Validate that a string is a valid H3 cell index.

        Args:
            h3_index: String to validate

        Returns:
            True if valid H3 cell index
        """
        if not isinstance(h3_index, str) or not h3_index:
            return False
        return bool(self._call("is_valid_cell", h3.is_valid_cell, h3_index))

    def is_pentagon(self, h3_index: str) -> bool:
        return bool(self._call("is_pentagon", h3.is_pentagon, h3_index))

    def get_base_cell_number(self, h3_index: str) -> int:
        return self._call("get_base_cell_number", h3.get_base_cell_number, h3_index)

    def is_res_class_iii(self, h3_index: str) -> bool:
        """Class III resolutions are the odd ones, rotated relative to their parents."""
        return bool(self._call("is_res_class_III", h3.is_res_class_III, h3_index))

    def describe_cell(self, h3_index: str) -> CellSummary:
        """
        Collect center, boundary and metadata for a cell.

        Args:
            h3_index: H3 cell index string

        Returns:
            CellSummary for the cell
        """
        return CellSummary(
            h3_index=h3_index,
            center=self.cell_to_latlng(h3_index),
            boundary=self.cell_to_boundary(h3_index),
            is_pentagon=self.is_pentagon(h3_index),
            base_cell_number=self.get_base_cell_number(h3_index),
            is_res_class_iii=self.is_res_class_iii(h3_index),
        )


# Convenience functions
def get_grid_adapter() -> H3GridAdapter:
    """Get an H3 grid adapter."""
    return H3GridAdapter()


def latlng_to_cell(lat: float, lng: float, resolution: int) -> str:
    """Convert lat/lng to an H3 cell index."""
    return get_grid_adapter().latlng_to_cell(lat, lng, resolution)

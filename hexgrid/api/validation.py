"""
Request validation for the HexGrid API service.

Raw query-string or JSON-body values are parsed into typed query structs.
Failures raise InvalidInput (or MissingParameters) carrying the message that
is returned to the client.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..common import InvalidInput, MissingParameters

MIN_LATITUDE, MAX_LATITUDE = -90.0, 90.0
MIN_LONGITUDE, MAX_LONGITUDE = -180.0, 180.0
MIN_RESOLUTION, MAX_RESOLUTION = 0, 15


@dataclass
class CoordinateQuery:
    """Validated coordinate + resolution request."""

    latitude: float
    longitude: float
    resolution: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "resolution": self.resolution,
        }


@dataclass
class RingQuery:
    """Validated neighbor ring request."""

    h3_index: str
    k: int


def query_params_to_dict(params: Mapping[str, str]) -> Dict[str, str]:
    """Flatten query parameters, treating empty values as absent."""
    return {key: value for key, value in params.items() if value != ""}


def parse_float(value: Any) -> Optional[float]:
    """
    Parse a finite float from a string or JSON number.

    Returns:
        The parsed value, or None when the value is not a finite number
    """
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def parse_int(value: Any) -> Optional[int]:
    """
    Parse an integer from a string or JSON number.

    Integral floats such as 9.0 are accepted; 9.5 is not.

    Returns:
        The parsed value, or None when the value is not an integer
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    number = parse_float(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def require(params: Mapping[str, Any], names: List[str], example: Any = None) -> None:
    """Raise MissingParameters unless every name is present in params."""
    missing = [name for name in names if name not in params]
    if missing:
        raise MissingParameters(required=names, example=example)


def validate_latitude(latitude: float) -> float:
    if not (MIN_LATITUDE <= latitude <= MAX_LATITUDE):
        raise InvalidInput(
            "Latitude must be between -90 and 90", error="Invalid latitude"
        )
    return latitude


def validate_longitude(longitude: float) -> float:
    if not (MIN_LONGITUDE <= longitude <= MAX_LONGITUDE):
        raise InvalidInput(
            "Longitude must be between -180 and 180", error="Invalid longitude"
        )
    return longitude


def validate_resolution(resolution: int) -> int:
    if not (MIN_RESOLUTION <= resolution <= MAX_RESOLUTION):
        raise InvalidInput(
            "Resolution must be between 0 and 15", error="Invalid resolution"
        )
    return resolution


def validate_k(raw_k: Any, max_k: int) -> int:
    """
    Parse and range-check a k value.

    Args:
        raw_k: Raw k from the query string
        max_k: Largest accepted k

    Returns:
        Validated k
    """
    k = parse_int(raw_k)
    if k is None or not (0 <= k <= max_k):
        raise InvalidInput(
            f"k must be an integer between 0 and {max_k}", error="Invalid k value"
        )
    return k


def validate_coordinate_query(
    params: Mapping[str, Any],
    lat_key: str = "lat",
    lng_key: str = "lon",
    res_key: str = "resolution",
    default_resolution: Optional[int] = None,
    example: Any = None,
) -> CoordinateQuery:
    """
    Validate a latitude/longitude/resolution request.

    Args:
        params: Raw parameters (query string or JSON body)
        lat_key: Name of the latitude parameter
        lng_key: Name of the longitude parameter
        res_key: Name of the resolution parameter
        default_resolution: Resolution used when res_key is absent; when None
            the resolution is required
        example: Example request echoed back on missing parameters

    Returns:
        Validated CoordinateQuery
    """
    required = [lat_key, lng_key]
    if default_resolution is None:
        required.append(res_key)
    require(params, required, example)

    latitude = parse_float(params[lat_key])
    longitude = parse_float(params[lng_key])
    resolution = parse_int(params.get(res_key, default_resolution))

    if latitude is None or longitude is None or resolution is None:
        raise InvalidInput(
            f"{lat_key} and {lng_key} must be numbers, {res_key} must be an integer",
            error="Invalid parameter types",
        )

    return CoordinateQuery(
        latitude=validate_latitude(latitude),
        longitude=validate_longitude(longitude),
        resolution=validate_resolution(resolution),
    )


def validate_ring_query(
    h3_index: Optional[str],
    raw_k: Any,
    is_valid_cell: Callable[[str], bool],
    max_k: int,
) -> RingQuery:
    """
    Validate a neighbor ring request.

    Args:
        h3_index: Center cell index as supplied by the client
        raw_k: Raw k value
        is_valid_cell: Predicate used to check the index
        max_k: Largest accepted k

    Returns:
        Validated RingQuery
    """
    if not h3_index or not is_valid_cell(h3_index):
        raise InvalidInput(
            "The provided H3 index is not valid", error="Invalid H3 index"
        )
    return RingQuery(h3_index=h3_index, k=validate_k(raw_k, max_k))

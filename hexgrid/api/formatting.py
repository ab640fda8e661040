"""
Response shaping for the HexGrid API service.

Turns adapter results and errors into JSON payloads with the status codes
the API promises: 200 for results, 400/404/500 for the error taxonomy.
"""

from typing import Any, Dict, List, Tuple

from fastapi.responses import JSONResponse

from ..common import HexGridError
from ..h3 import CellSummary, NeighborResult
from .validation import CoordinateQuery

SERVICE_MESSAGE = "H3 API Server is running"


def _latlng(point: Tuple[float, float]) -> Dict[str, float]:
    return {"lat": point[0], "lng": point[1]}


def format_h3_response(query: CoordinateQuery, summary: CellSummary) -> Dict[str, Any]:
    """
    Shape the /h3 payload.

    Args:
        query: Validated request, echoed back as input
        summary: Cell description from the grid adapter

    Returns:
        Payload with input, h3Index, hexCenter, boundary, isPentagon, metadata
    """
    return {
        "input": query.to_dict(),
        "h3Index": summary.h3_index,
        "hexCenter": _latlng(summary.center),
        "boundary": [_latlng(vertex) for vertex in summary.boundary],
        "isPentagon": summary.is_pentagon,
        "metadata": {
            "baseCellNumber": summary.base_cell_number,
            "isResClassIII": summary.is_res_class_iii,
        },
    }


def format_cell_response(
    h3_index: str,
    center: Tuple[float, float],
    boundary: List[List[float]],
    resolution: int,
) -> Dict[str, Any]:
    """Shape the /cell payload: center as [lat, lng], boundary as a GeoJSON ring."""
    return {
        "index": h3_index,
        "center": [center[0], center[1]],
        "boundary": boundary,
        "res": resolution,
    }


def format_neighbors_response(result: NeighborResult) -> Dict[str, Any]:
    return {
        "center": result.center,
        "k": result.k,
        "neighbors": result.neighbors,
        "count": result.count,
    }


def format_kring_response(result: NeighborResult) -> Dict[str, Any]:
    return {"index": result.center, "k": result.k, "ring": result.neighbors}


def format_service_index(endpoints: Dict[str, str]) -> Dict[str, Any]:
    """
    Shape the root route listing.

    Args:
        endpoints: Mapping of "METHOD path" to description

    Returns:
        Payload with the service message, endpoint descriptions and route paths
    """
    routes = []
    for endpoint in endpoints:
        path = endpoint.split(" ", 1)[-1]
        if path not in routes:
            routes.append(path)
    return {
        "ok": True,
        "message": SERVICE_MESSAGE,
        "endpoints": dict(endpoints),
        "routes": routes,
    }


def json_response(payload: Dict[str, Any], status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=payload, status_code=status_code)


def error_response(error: HexGridError) -> JSONResponse:
    """Serialize an error from the taxonomy with its status code."""
    return json_response(error.to_dict(), status_code=error.status_code)


def unexpected_error_response(exc: Exception) -> JSONResponse:
    """Serialize an exception that escaped the route handlers."""
    return json_response(
        {"error": "Something went wrong!", "message": str(exc)}, status_code=500
    )

"""
FastAPI application for the HexGrid API service.

Routes parse and validate request parameters, delegate to the H3 adapter
and shape the JSON response. All errors are converted to JSON bodies at the
request boundary.
"""

import json
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..common import (
    config,
    AppConfig,
    get_logger,
    log_http_request,
    TimedLogger,
    HexGridError,
    InvalidInput,
    NotFound,
)
from ..h3 import H3GridAdapter, H3NeighborDiscovery
from .formatting import (
    error_response,
    format_cell_response,
    format_h3_response,
    format_kring_response,
    format_neighbors_response,
    format_service_index,
    json_response,
    unexpected_error_response,
)
from .validation import (
    CoordinateQuery,
    query_params_to_dict,
    require,
    validate_coordinate_query,
    validate_ring_query,
)

logger = get_logger("api")

APP_NAME = "HexGrid H3 API"

ENDPOINTS = {
    "GET /": "Service and route listing",
    "GET /h3": "Generate H3 hex from lat, lon, and resolution",
    "POST /h3": "Generate H3 hex from JSON body",
    "GET /h3/{h3_index}/neighbors": "Get H3 hexes within k steps of an index",
    "GET /cell": "H3 cell with center and GeoJSON boundary from lat, lng, res",
    "GET /kring": "H3 cells within k steps of an index",
}

H3_QUERY_EXAMPLE = "/h3?lat=37.7749&lon=-122.4194&resolution=9"
H3_BODY_EXAMPLE = {"lat": 37.7749, "lon": -122.4194, "resolution": 9}
CELL_QUERY_EXAMPLE = "/cell?lat=-34.6037&lng=-58.3816&res=7"
KRING_QUERY_EXAMPLE = "/kring?index=8928308280fffff&k=1"


async def read_json_body(request: Request) -> Dict[str, Any]:
    """
    Read the request body as a JSON object.

    An empty body is treated as an empty object so that it reports the
    missing parameters rather than a parse error.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        raise InvalidInput("Request body must be valid JSON", error="Invalid JSON body")
    if not isinstance(body, dict):
        raise InvalidInput(
            "Request body must be a JSON object", error="Invalid JSON body"
        )
    return body


def create_app(app_config: Optional[AppConfig] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        app_config: Configuration to use (defaults to the global config)

    Returns:
        Configured FastAPI application
    """
    cfg = app_config or config
    adapter = H3GridAdapter()
    discovery = H3NeighborDiscovery(max_k=cfg.h3.max_k)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Fail fast if the h3 bindings cannot serve a trivial lookup
        with TimedLogger(logger, "server startup", port=cfg.server.port):
            adapter.describe_cell(adapter.latlng_to_cell(0.0, 0.0, 0))
        logger.info(f"H3 API Server is running on port {cfg.server.port}")
        logger.info(f"Visit http://localhost:{cfg.server.port} for API documentation")
        yield
        logger.info("H3 API Server shutting down")

    app = FastAPI(title=APP_NAME, debug=cfg.debug, lifespan=lifespan)
    app.state.config = cfg

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.server.cors_allow_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_and_guard_requests(request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}")
            response = unexpected_error_response(e)
        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra=log_http_request(
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 3),
            ),
        )
        return response

    @app.exception_handler(HexGridError)
    async def handle_hexgrid_error(request: Request, exc: HexGridError):
        if exc.status_code >= 500:
            logger.error(
                f"{request.method} {request.url.path} failed: {exc.message}",
                extra={"error_type": type(exc).__name__},
            )
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # Unsupported methods on known paths are reported like unknown routes
        if exc.status_code in (404, 405):
            return error_response(NotFound(request.method, request.url.path))
        return json_response(
            {"error": str(exc.detail), "message": str(exc.detail)},
            status_code=exc.status_code,
        )

    def describe(query: CoordinateQuery) -> Dict[str, Any]:
        h3_index = adapter.latlng_to_cell(
            query.latitude, query.longitude, query.resolution
        )
        return format_h3_response(query, adapter.describe_cell(h3_index))

    @app.get("/")
    async def index():
        return format_service_index(ENDPOINTS)

    @app.get("/h3")
    async def h3_from_query(request: Request):
        params = query_params_to_dict(request.query_params)
        return describe(validate_coordinate_query(params, example=H3_QUERY_EXAMPLE))

    @app.post("/h3")
    async def h3_from_body(request: Request):
        body = await read_json_body(request)
        return describe(validate_coordinate_query(body, example=H3_BODY_EXAMPLE))

    @app.get("/h3/{h3_index}/neighbors")
    async def h3_neighbors(h3_index: str, request: Request):
        params = query_params_to_dict(request.query_params)
        ring = validate_ring_query(
            h3_index, params.get("k", 1), adapter.is_valid_cell, discovery.max_k
        )
        return format_neighbors_response(discovery.get_neighbors(ring.h3_index, ring.k))

    @app.get("/cell")
    async def cell(request: Request):
        params = query_params_to_dict(request.query_params)
        query = validate_coordinate_query(
            params,
            lat_key="lat",
            lng_key="lng",
            res_key="res",
            default_resolution=cfg.h3.default_resolution,
            example=CELL_QUERY_EXAMPLE,
        )
        h3_index = adapter.latlng_to_cell(
            query.latitude, query.longitude, query.resolution
        )
        return format_cell_response(
            h3_index,
            adapter.cell_to_latlng(h3_index),
            adapter.cell_to_geojson_ring(h3_index),
            query.resolution,
        )

    @app.get("/kring")
    async def kring(request: Request):
        params = query_params_to_dict(request.query_params)
        require(params, ["index"], example=KRING_QUERY_EXAMPLE)
        ring = validate_ring_query(
            params["index"], params.get("k", 1), adapter.is_valid_cell, discovery.max_k
        )
        return format_kring_response(discovery.get_neighbors(ring.h3_index, ring.k))

    return app


app = create_app()

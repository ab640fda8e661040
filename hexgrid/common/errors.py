"""
Error taxonomy for the HexGrid API service.

Every error raised inside a request carries the HTTP status it maps to and
the JSON payload returned to the client.
"""

from typing import Any, Dict, List, Optional


class HexGridError(Exception):
    """Base class for errors that are answered with a JSON error body."""

    status_code: int = 500
    title: str = "Internal server error"

    def __init__(self, message: str, error: Optional[str] = None, **details: Any):
        super().__init__(message)
        self.message = message
        self.error = error or self.title
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON error payload."""
        return {"error": self.error, "message": self.message, **self.details}


class InvalidInput(HexGridError):
    """Missing, non-numeric or out-of-range request parameters."""

    status_code = 400
    title = "Invalid input"


class MissingParameters(InvalidInput):
    """One or more required parameters were not supplied."""

    title = "Missing required parameters"

    def __init__(self, required: List[str], example: Any = None):
        details: Dict[str, Any] = {"required": list(required)}
        if example is not None:
            details["example"] = example
        super().__init__(
            f"Missing required parameters: {', '.join(required)}", **details
        )


class NotFound(HexGridError):
    """No route matches the request."""

    status_code = 404
    title = "Endpoint not found"

    def __init__(self, method: str, path: str):
        super().__init__(f"{method} {path} is not a valid endpoint")
        self.method = method
        self.path = path


class InternalError(HexGridError):
    """Unexpected failure in the grid library or while shaping a response."""

    status_code = 500
    title = "Internal server error"

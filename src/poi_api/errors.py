"""Domain errors raised by the POI service.

Each error carries the HTTP status the API answers with, so the exception
handlers in ``poi_api.main`` can translate them without knowing about
individual use cases.
"""

from typing import Any


class POIServiceError(Exception):
    """Base class for expected, request-terminating failures."""

    status_code = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Body returned to API clients."""
        body: dict[str, Any] = {
            "detail": self.message,
            "error_type": type(self).__name__,
        }
        if self.details:
            body.update(self.details)
        return body


class InvalidPOIError(POIServiceError):
    """Input is malformed or out of range."""

    status_code = 400

    def __init__(self, message: str = "Invalid data", errors: list[dict[str, Any]] | None = None):
        super().__init__(message, {"errors": errors or []})
        self.errors = errors or []


class ForbiddenError(POIServiceError):
    """The actor is authenticated but not allowed to perform the operation."""

    status_code = 403


class NotFoundError(POIServiceError):
    """The referenced record does not exist."""

    status_code = 404

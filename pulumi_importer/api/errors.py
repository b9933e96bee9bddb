"""Standardized error handling for the importer API.

Operation failures are not HTTP errors: they come back as
`{"error": "..."}` with status 200. These handlers cover bad requests
and unexpected faults in the transport itself.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from flask import jsonify
from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for API errors.

    Usage:
        raise APIError("Invalid input", status_code=400, details={"field": "name"})
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}

    def to_response(self) -> Tuple[dict, int]:
        """Convert to Flask JSON response."""
        response = {"error": self.message}
        if self.details:
            response["details"] = self.details
        return jsonify(response), self.status_code


class ValidationError(APIError):
    """Raised for input validation failures."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, status_code=400, details=details)

    @classmethod
    def from_pydantic(cls, error: PydanticValidationError) -> "ValidationError":
        first = error.errors()[0] if error.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        return cls(first.get("msg", "Invalid request"), field=location or None)


def handle_api_errors(app):
    """Register error handlers with Flask app.

    Args:
        app: Flask application instance
    """

    @app.errorhandler(APIError)
    def handle_api_error(error: APIError):
        return error.to_response()

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(500)
    def handle_internal_error(error):
        logger.exception("Internal server error")
        return jsonify({"error": "Internal server error"}), 500

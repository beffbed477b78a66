"""Error taxonomy shared by handlers and the HTTP layer."""

from typing import Any, Dict, List, Optional


class ImisError(Exception):
    """Base class for errors with a defined client-facing meaning."""

    status_code = 500
    code = "internal"

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFound(ImisError):
    status_code = 404
    code = "not_found"


class ValidationFailed(ImisError):
    """Malformed input, missing required fields or references to unknown records."""
    status_code = 400
    code = "validation_failed"


class Conflict(ImisError):
    """Duplicate identity on create."""
    status_code = 409
    code = "conflict"


class Internal(ImisError):
    status_code = 500
    code = "internal"

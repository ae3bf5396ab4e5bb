"""Errors raised by the catalog service layer.

``ServiceError`` subclasses are expected, client-caused conditions; the
API layer turns them into the error envelope with their status code.
Anything else (``CapacityExceeded`` included) is an internal fault.
"""
from typing import Any, Dict, List, Optional


class ServiceError(Exception):
    code = "SERVICE_ERROR"
    status_code = 400

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(ServiceError):
    """Malformed or out-of-range request input."""
    code = "VALIDATION_ERROR"
    status_code = 400


class NotFound(ServiceError):
    """No product (or no products in a category) matched the request."""
    code = "NOT_FOUND"
    status_code = 404


class CapacityExceeded(Exception):
    """The store already holds its maximum number of records."""

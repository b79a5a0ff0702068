# tourlead/core/exceptions.py
from __future__ import annotations

from typing import Any, Dict, Optional


class BaseAPIException(Exception):
    """Base exception for all TourLead errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class ValidationError(BaseAPIException):
    """Bad or missing input."""
    def __init__(self, message: str = "Validation error", **kwargs):
        super().__init__(message, status_code=422, **kwargs)


class AuthenticationError(BaseAPIException):
    """Caller could not be identified."""
    def __init__(self, message: str = "Authentication failed", **kwargs):
        super().__init__(message, status_code=401, **kwargs)


class AuthorizationError(BaseAPIException):
    """Caller is not permitted to touch this row."""
    def __init__(self, message: str = "Authorization failed", **kwargs):
        super().__init__(message, status_code=403, **kwargs)


class NotFoundError(BaseAPIException):
    """Referenced offer, commitment, guide or company is missing."""
    def __init__(self, message: str = "Resource not found", **kwargs):
        super().__init__(message, status_code=404, **kwargs)


class StateError(BaseAPIException):
    """Row is not in the status the transition requires."""
    def __init__(self, message: str = "Invalid state for this operation", **kwargs):
        super().__init__(message, status_code=409, **kwargs)


class ConflictError(BaseAPIException):
    """Date range overlaps an existing commitment."""
    def __init__(self, message: str = "Resource conflict", **kwargs):
        super().__init__(message, status_code=409, **kwargs)


class PersistenceError(BaseAPIException):
    """A store operation failed."""
    def __init__(self, message: str = "Database error", **kwargs):
        super().__init__(message, status_code=500, **kwargs)


class PermissionDeniedError(PersistenceError):
    """The database refused the operation for lack of privileges."""
    def __init__(self, message: str = "Database permission denied", **kwargs):
        super().__init__(message, **kwargs)


class NotificationError(BaseAPIException):
    """Email dispatch failed."""
    def __init__(self, message: str = "Notification could not be sent", **kwargs):
        super().__init__(message, status_code=502, **kwargs)

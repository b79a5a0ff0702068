# tourlead/db/errors.py
from __future__ import annotations

from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from tourlead.core.exceptions import PermissionDeniedError, PersistenceError

# SQLSTATE for insufficient_privilege (row level security, revoked grants)
INSUFFICIENT_PRIVILEGE = "42501"


def _sqlstate(exc: SQLAlchemyError) -> str | None:
    if not isinstance(exc, DBAPIError) or exc.orig is None:
        return None
    for attr in ("sqlstate", "pgcode"):
        value = getattr(exc.orig, attr, None)
        if value:
            return str(value)
    return None


def translate_store_error(exc: SQLAlchemyError, operation: str) -> PersistenceError:
    """Map a driver error to the store error taxonomy."""
    details = {"operation": operation, "error": str(exc)[:500]}
    if _sqlstate(exc) == INSUFFICIENT_PRIVILEGE:
        return PermissionDeniedError(
            message=f"Permission denied during {operation}",
            code="permission_denied",
            details=details,
        )
    return PersistenceError(
        message=f"Store operation failed: {operation}",
        code="store_error",
        details=details,
    )

# tourlead/services/auth.py
"""
Caller identity.

Tokens are issued by the auth provider; the API only verifies them. The
`sub` claim is the caller's user id, which is also the id of their guide,
company or admin row.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Request
from jose import JWTError, jwt

from tourlead.core.config import settings
from tourlead.core.exceptions import AuthenticationError
from tourlead.core.logging import bind_actor, get_structlog_logger

logger = get_structlog_logger()


def _extract_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None

    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


def decode_token(token: str) -> Dict[str, Any]:
    options = {"verify_aud": settings.jwt_audience is not None}
    return jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.algorithm],
        audience=settings.jwt_audience,
        options=options,
    )


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None, **claims: Any) -> str:
    """Issue a token the API accepts. Used by the CLI and the test suite."""
    now = datetime.now(timezone.utc)
    to_encode: Dict[str, Any] = {
        **claims,
        "sub": subject,
        "iat": now,
        "exp": now + (expires_delta or timedelta(hours=1)),
    }
    if settings.jwt_audience:
        to_encode["aud"] = settings.jwt_audience
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


async def get_current_actor(request: Request) -> str:
    """FastAPI dependency returning the authenticated caller id."""
    token = _extract_token(request)
    if not token:
        logger.warning("auth.missing_token", path=request.url.path, method=request.method)
        raise AuthenticationError("Authentication token is required", code="missing_token")

    try:
        payload = decode_token(token)
    except JWTError as e:
        logger.warning("auth.invalid_token", error=str(e), path=request.url.path)
        raise AuthenticationError("Invalid authentication token", code="invalid_token") from e

    actor_id = payload.get("sub")
    if not actor_id:
        logger.warning("auth.missing_subject", path=request.url.path)
        raise AuthenticationError("Invalid authentication token", code="invalid_token")

    bind_actor(actor_id)
    return str(actor_id)

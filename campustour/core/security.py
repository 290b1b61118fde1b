"""Bearer token helpers.

Tokens are issued by the login service (outside this backend's scope); here we
only need to mint them for tooling/tests and to resolve the acting user id.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from campustour.core.config import settings


def create_access_token(user_id: int, role: str | None = None) -> str:
    """Create a JWT whose subject is the numeric user id."""
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_expire_minutes),
    }
    if role:
        payload["role"] = role
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_user_id(token: str) -> int | None:
    """Return the user id carried by a valid token, or None."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        return None

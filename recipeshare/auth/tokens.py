from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from ..config import DEFAULT_SETTINGS, Settings
from ..errors import UnauthorizedError


def create_access_token(
    account_id: str,
    settings: Settings = DEFAULT_SETTINGS,
    expires_delta: timedelta | None = None,
) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=settings.token_ttl_days))
    payload = {"sub": account_id, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings = DEFAULT_SETTINGS) -> dict[str, Any]:
    """Verify signature and expiry. Raises ``UnauthorizedError`` on any failure."""
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Not authorized, token expired")
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Not authorized, invalid token")

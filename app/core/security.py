"""Bearer token handling. The identity provider issues HS256 JWTs; we only read `sub`."""
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from app.core.config import get_settings


def create_access_token(subject: str, extra: dict[str, Any] | None = None) -> str:
    """Issue a token for `subject`. Used by tests and local tooling."""
    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode = {"sub": str(subject), "exp": expire, "type": "access"}
    if extra:
        to_encode.update(extra)
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> dict | None:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None


def user_id_from_token(token: str) -> str | None:
    """Return the opaque user id carried by a valid token; None otherwise."""
    claims = decode_access_token(token)
    if not claims:
        return None
    sub = claims.get("sub")
    return str(sub) if sub else None


def parse_bearer(authorization: str | None) -> str | None:
    """Extract the token from an `Authorization: Bearer ...` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()

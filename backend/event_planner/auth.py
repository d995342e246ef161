"""Identity gate — verifies bearer tokens issued by the identity provider.

Every guarded route depends on `get_current_identity`, which hands the caller's
verified id and email to the service layer explicitly.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import PyJWTError

from event_planner.config import settings
from event_planner.services.error_codes import ErrorCode
from event_planner.services.exceptions import UnauthorizedError

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    user_id: int
    email: str


def create_access_token(user_id: int, email: str, ttl_seconds: int | None = None) -> str:
    now = datetime.now(timezone.utc)
    exp = now + timedelta(seconds=ttl_seconds or settings.ACCESS_TOKEN_TTL_SECONDS)
    payload = {
        "sub": str(user_id),
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
        "iss": settings.JWT_ISSUER,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_access_token(token: str) -> Identity:
    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            issuer=settings.JWT_ISSUER,
            options={"require": ["sub", "exp", "iss"]},
        )
    except PyJWTError as exc:
        raise UnauthorizedError(ErrorCode.UNAUTHORIZED.value, "invalid access token") from exc

    email = claims.get("email")
    if not email:
        raise UnauthorizedError(ErrorCode.UNAUTHORIZED.value, "token carries no email")
    try:
        user_id = int(claims["sub"])
    except (TypeError, ValueError):
        raise UnauthorizedError(ErrorCode.UNAUTHORIZED.value, "invalid subject in token") from None

    return Identity(user_id=user_id, email=email)


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Identity:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthorizedError(ErrorCode.UNAUTHORIZED.value, "missing bearer token")
    return verify_access_token(credentials.credentials)

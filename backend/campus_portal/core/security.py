from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from campus_portal.core.config import settings
from campus_portal.core.errors import Unauthorized
from campus_portal.utils.logging import get_logger

logger = get_logger(__name__)

security_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Caller:
    """Identity resolved from a bearer credential issued by the identity provider."""

    id: str
    email: str | None = None


def create_access_token(subject: str, email: str | None = None, expire_minutes: int = 60) -> str:
    expire = datetime.now(UTC) + timedelta(minutes=expire_minutes)
    payload: dict = {"sub": subject, "exp": expire}
    if email:
        payload["email"] = email
    if settings.jwt_audience:
        payload["aud"] = settings.jwt_audience
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    options = {"verify_aud": settings.jwt_audience is not None}
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options=options,
        )
    except JWTError as exc:
        logger.info("Rejected bearer credential: %s", exc)
        return None


async def get_current_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(security_scheme),
) -> Caller:
    if credentials is None:
        raise Unauthorized()
    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise Unauthorized()
    subject: str | None = payload.get("sub")
    if not subject:
        raise Unauthorized()
    return Caller(id=subject, email=payload.get("email"))

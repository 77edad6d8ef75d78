"""JWT token management and password hashing."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError

from storedesk.core.config import settings
from storedesk.core.errors import InvalidToken, TokenExpired

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class TokenClaims(BaseModel):
    """Identity claims carried by a session token."""

    sub: UUID
    username: str
    role: str
    branch: str | None = None
    exp: datetime


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def create_access_token(
    admin_id: UUID,
    username: str,
    role: str,
    branch: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {
        "sub": str(admin_id),
        "username": username,
        "role": role,
        "branch": branch,
        "exp": expire,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> TokenClaims:
    """Decode and validate JWT. Raises TokenExpired or InvalidToken on failure."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError as exc:
        raise TokenExpired() from exc
    except JWTError as exc:
        raise InvalidToken() from exc

    try:
        return TokenClaims.model_validate(payload)
    except ValidationError as exc:
        raise InvalidToken("Token is missing required claims") from exc

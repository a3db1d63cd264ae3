from datetime import datetime, timedelta, timezone
from typing import Optional, Any
import uuid

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import settings


# Stored hashes are bcrypt ($2a$/$2b$/$2y$), matching the accounts already in the users table
pwd_context = CryptContext(
    schemes=["bcrypt"],
    default="bcrypt",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

TOKEN_TYPE = "access"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Check a login password against the stored bcrypt hash.

    Malformed or empty hashes count as a mismatch rather than an error.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(
    subject: str | int,
    lifetime: Optional[timedelta] = None,
    extra_claims: Optional[dict[str, Any]] = None,
) -> str:
    """
    Sign a bearer token for ``subject`` (a user id).

    Tokens last ``ACCESS_TOKEN_EXPIRE_MINUTES`` unless ``lifetime`` is given;
    ``extra_claims`` are merged into the payload as-is.
    """
    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": str(subject),
        "iat": issued_at,
        "exp": issued_at + (lifetime or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)),
        "jti": uuid.uuid4().hex,
        "type": TOKEN_TYPE,
    }
    claims.update(extra_claims or {})
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> Optional[dict[str, Any]]:
    """Payload of a token we signed, or None when it is forged, garbled or expired."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None


def verify_access_token(token: str) -> Optional[str]:
    """User id carried by a valid access token."""
    payload = decode_token(token)
    if not payload or payload.get("type") != TOKEN_TYPE:
        return None
    return payload.get("sub")

"""Password hashing and JWT helpers."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import HTTPException
from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError
from passlib.context import CryptContext

from .config import get_server_settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Token part of an ``Authorization: Bearer <token>`` header value."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def create_jwt_token(
    subject: str,
    expires_delta: Optional[timedelta] = None,
    secret_key: Optional[str] = None,
    **extra_claims,
) -> str:
    """Sign a token for ``subject`` (a user id).

    Expiry defaults to ``token_expiration_minutes``; the key and algorithm come
    from settings unless ``secret_key`` overrides the key.
    """
    settings = get_server_settings()
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.token_expiration_minutes)
    claims = {"sub": subject, "iat": issued_at, "exp": issued_at + lifetime, **extra_claims}
    return jwt.encode(
        claims, secret_key or settings.jwt_secret_key, algorithm=settings.jwt_algorithm
    )


def decode_jwt_token(token: str, secret_key: Optional[str] = None) -> dict:
    """Verify a token and return its claims.

    Raises:
        HTTPException: 401 if the token is expired, tampered with or malformed
    """
    settings = get_server_settings()
    try:
        return jwt.decode(
            token,
            secret_key or settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token has expired")
    except JWTError as e:
        raise HTTPException(status_code=401, detail=f"Invalid token: {e}")


def token_subject(token: str) -> str:
    """The user id a valid token was issued for."""
    subject = decode_jwt_token(token).get("sub")
    if not subject:
        raise HTTPException(status_code=401, detail="Invalid token format")
    return subject

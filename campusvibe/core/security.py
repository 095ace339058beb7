"""Security and authentication utilities."""
import hmac
from datetime import datetime, timedelta, timezone
from typing import Optional
import argon2
import jwt
from fastapi import HTTPException, Request

from campusvibe.core import config
from campusvibe.core.exceptions import AuthenticationRequired

# Argon2 hasher for the admin password
ph = argon2.PasswordHasher(
    time_cost=2,
    memory_cost=65536,
    parallelism=1,
    hash_len=32,
    salt_len=16
)


def get_password_hash(password: str) -> str:
    """Hash a password using Argon2."""
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its Argon2 hash."""
    try:
        ph.verify(password_hash, password)
        return True
    except argon2.exceptions.VerifyMismatchError:
        return False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=config.settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, config.settings.SECRET_KEY, algorithm=config.settings.ALGORITHM)
    return encoded_jwt


def create_user_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create a user JWT the way the auth platform issues them (``sub`` = user id)."""
    return create_access_token({"sub": user_id}, expires_delta)


def _bearer_token(request: Request) -> Optional[str]:
    authorization = request.headers.get("Authorization")
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip() or None
    return request.cookies.get("access_token")


def get_optional_user_id(request: Request) -> Optional[str]:
    """Return the signed-in user's id, or None when no token was sent.

    A token that is present but invalid or expired is still rejected with 401,
    so a stale session never silently degrades to anonymous.
    """
    token = _bearer_token(request)
    if not token:
        return None

    try:
        payload = jwt.decode(token, config.settings.SECRET_KEY, algorithms=[config.settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail="Invalid token")

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token")
    return str(user_id)


def require_user_id(request: Request) -> str:
    """Like get_optional_user_id, but anonymous requests are refused."""
    user_id = get_optional_user_id(request)
    if user_id is None:
        raise AuthenticationRequired("Please login first!")
    return user_id


def verify_admin_token(request: Request) -> dict:
    """Verify JWT token from cookie and return payload."""
    token = request.cookies.get("admin_token")

    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        payload = jwt.decode(token, config.settings.SECRET_KEY, algorithms=[config.settings.ALGORITHM])
        if not payload.get("is_admin"):
            raise HTTPException(status_code=403, detail="Not authorized")
        return payload
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail="Invalid token")


def verify_admin_password(password: str) -> bool:
    """Verify admin password using Argon2.

    Supports both hashed passwords (starting with $argon2) and plaintext.
    If ADMIN_PASSWORD is hashed (recommended), verifies using Argon2.
    If ADMIN_PASSWORD is plaintext (legacy/dev), does direct comparison.
    """
    stored_password = config.settings.ADMIN_PASSWORD

    if stored_password.startswith("$argon2"):
        return verify_password(password, stored_password)
    else:
        return password == stored_password


def verify_ingest_secret(provided: Optional[str]) -> bool:
    """Check the shared secret sent by event-ingest automations."""
    expected = config.settings.INGEST_API_SECRET_KEY
    if not expected:
        raise RuntimeError("INGEST_API_SECRET_KEY not configured")
    if provided is None:
        return False
    return hmac.compare_digest(provided.encode(), expected.encode())

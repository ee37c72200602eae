"""
auth.py — Password hashing and bearer tokens
The services only ever see an integer user id; this module turns a login
into a signed token and a request's Authorization header back into that id.
"""

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
from fastapi import HTTPException, Request, status
from jose import JWTError, jwt

from config import JWT_ALGORITHM, JWT_EXPIRY_HOURS, JWT_SECRET

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes and newer releases reject longer input
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
    except ValueError as e:
        # Stored value is not a bcrypt hash
        logger.warning(f"Password check failed: {e}")
        return False


def create_token(user_id: int, username: str) -> str:
    """Sign a token carrying the user's id, valid for JWT_EXPIRY_HOURS."""
    claims = {
        "user_id": user_id,
        "username": username,
        "exp": datetime.now(timezone.utc) + timedelta(hours=JWT_EXPIRY_HOURS),
    }
    return jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_user_id(token: str) -> int | None:
    """User id from a valid token, or None if the token is bad, expired or malformed."""
    try:
        claims = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError:
        return None
    user_id = claims.get("user_id")
    # bool is an int subclass
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        return None
    return user_id


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(request: Request) -> int:
    """Dependency: the id of the user whose bearer token signed this request."""
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise _unauthorized("Missing or invalid Authorization header")

    user_id = decode_user_id(token.strip())
    if user_id is None:
        raise _unauthorized("Invalid or expired token")
    return user_id

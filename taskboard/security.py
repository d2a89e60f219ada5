import logging
from datetime import timedelta
from typing import Optional

import bcrypt
from fastapi import Request
from jose import JWTError, jwt
from pydantic import BaseModel

from .config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    BCRYPT_ROUNDS,
    SECRET_KEY,
    TOKEN_COOKIE_NAME,
    TOKEN_HEADER_NAME,
)
from .errors import InvalidTokenError, UnauthenticatedError
from .timeutils import utcnow

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class Identity(BaseModel):
    """Authenticated caller, as carried in the token's ``user`` claim."""
    id: str
    email: str


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:72]  # bcrypt only looks at the first 72 bytes


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a password using bcrypt directly."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    hashed_bytes = hashed_password.encode("utf-8") if isinstance(hashed_password, str) else hashed_password
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_bytes)
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


def create_access_token(identity: Identity, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT carrying ``{"user": {"id", "email"}}``."""
    expire = utcnow() + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {"user": identity.model_dump(), "exp": expire}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Identity:
    """Verify the signature and expiry and return the token's identity.

    Raises InvalidTokenError for anything that does not verify.
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as exc:
        logger.warning("JWT verification error: %s", exc)
        raise InvalidTokenError()

    user = payload.get("user")
    if not isinstance(user, dict) or not user.get("id") or not user.get("email"):
        logger.warning("JWT payload has no usable user claim")
        raise InvalidTokenError()
    return Identity(id=str(user["id"]), email=user["email"])


def get_token_from_request(request: Request) -> Optional[str]:
    """Find the session token, checking in order: custom header, bearer header, cookie."""
    header_token = request.headers.get(TOKEN_HEADER_NAME)
    if header_token:
        return header_token.strip()

    auth_header = request.headers.get("Authorization", "")
    parts = auth_header.split(" ", 1)
    if len(parts) == 2 and parts[1].strip():
        return parts[1].strip()

    return request.cookies.get(TOKEN_COOKIE_NAME) or None


def get_current_identity(request: Request) -> Identity:
    """Dependency guarding authenticated routes."""
    token = get_token_from_request(request)
    if not token:
        raise UnauthenticatedError()
    return decode_access_token(token)

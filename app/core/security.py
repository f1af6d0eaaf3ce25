"""
Security and Authentication Module

Password hashing with bcrypt and JWT access tokens with PyJWT. The rest of
the service trusts the identity carried by a valid token.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt

from app.config.settings import settings
from .exceptions import InvalidTokenError, TokenExpiredError
from .logging import get_logger

logger = get_logger(__name__)


def hash_password(password: str) -> str:
    """Hash a plain password with a per-password salt"""
    salt = bcrypt.gensalt(rounds=settings.PASSWORD_BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(
    subject: str,
    role: str,
    expires_delta: Optional[timedelta] = None,
    extra_claims: Optional[Dict[str, Any]] = None
) -> str:
    """
    Create a signed access token.

    Args:
        subject: User ID placed in the ``sub`` claim
        role: User role placed in the ``role`` claim
        expires_delta: Token lifetime, defaults to ACCESS_TOKEN_EXPIRE_MINUTES
        extra_claims: Additional claims to embed

    Returns:
        Encoded JWT
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    payload: Dict[str, Any] = {
        "sub": str(subject),
        "role": role,
        "iat": now,
        "exp": expire,
        "type": "access",
    }
    if extra_claims:
        payload.update(extra_claims)
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate an access token.

    Raises:
        TokenExpiredError: If the token has expired
        InvalidTokenError: If the token is malformed or lacks required claims
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError()
    except jwt.PyJWTError as e:
        logger.debug(f"Token rejected: {e}")
        raise InvalidTokenError(reason=str(e))

    if not payload.get("sub") or not payload.get("role"):
        raise InvalidTokenError(reason="missing subject or role")
    return payload

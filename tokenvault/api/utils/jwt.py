from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from config import ApplicationConfig

ADMIN_ROLE = "admin"


def generate_admin_jwt(email: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Generate JWT access token for the administrator

    Args:
        email: Administrator email, stored as the subject
        expires_delta: Token lifetime, defaults to ADMIN_TOKEN_EXPIRE_MINUTES

    Returns:
        JWT token string (HS256)
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=ApplicationConfig.ADMIN_TOKEN_EXPIRE_MINUTES)

    now = datetime.now(UTC)
    payload = {
        "sub": email,
        "role": ADMIN_ROLE,
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
        return payload
    except JWTError:
        return None

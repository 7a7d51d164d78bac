# app/utils/security.py
from datetime import datetime, timedelta
from typing import Any, Optional
from jose import jwt
from ..config import settings

# ============================================================
# JWT Functions
# Tokens are issued by the platform's auth service; this API only verifies
# them. create_access_token exists for scripts and tests.
# ============================================================

def create_access_token(
    subject: Any,
    expires_delta: Optional[timedelta] = None,
    role: Optional[str] = None
) -> str:
    """
    Create a JWT access token with role claim and expiration.

    Args:
        subject: User ID
        expires_delta: Custom expiration time
        role: User role name (Admin, ContentCreator, Client)

    Returns:
        JWT token string with expiration
    """
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        'exp': expire,
        'sub': str(subject),
        'type': 'access',
        'iat': datetime.utcnow(),
        'role': role,
    }

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    """
    Decode and validate JWT token.

    Raises:
        ExpiredSignatureError: If token has expired
        JWTError: If token is invalid
    """
    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.ALGORITHM]
    )

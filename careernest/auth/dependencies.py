"""
Authentication Dependencies
JWT token handling and role-gated access
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from careernest.config import settings
from careernest.auth.caller import Caller, ROLES, ADMIN, ORGANIZATION, STUDENT

# Security scheme
security = HTTPBearer()


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create JWT access token

    Args:
        data: Claims to encode ({user_id, username, role})
        expires_delta: Token expiration time

    Returns:
        Encoded JWT token
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(hours=settings.JWT_EXPIRATION_HOURS)

    to_encode.update({"exp": expire})

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM
    )


def issue_token(user: dict) -> str:
    """Issue a token for a stored user record"""
    return create_access_token({
        "user_id": str(user["id"]),
        "username": user["username"],
        "role": user["role"],
    })


def decode_access_token(token: str) -> dict:
    """
    Decode JWT access token

    Raises:
        HTTPException: If token is invalid or expired
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)) -> Caller:
    """
    Get the calling principal from the bearer token

    Raises:
        HTTPException: If the token carries no usable identity
    """
    payload = decode_access_token(credentials.credentials)

    user_id = payload.get("user_id")
    role = payload.get("role")

    if user_id is None or role not in ROLES:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials"
        )

    return Caller(user_id=str(user_id), role=role, username=payload.get("username", ""))


def require_roles(*roles: str):
    """Build a dependency that only admits the given roles"""

    async def dependency(current_user: Caller = Depends(get_current_user)) -> Caller:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Not authorized. {' or '.join(r.capitalize() for r in roles)} access required."
            )
        return current_user

    return dependency


get_admin = require_roles(ADMIN)
get_organization = require_roles(ORGANIZATION)
get_student = require_roles(STUDENT)

"""Security utilities: JWT, password hashing, role checks."""

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careerhub.config import settings
from careerhub.core.errors import Forbidden, Unauthorized
from careerhub.db.session import get_db
from careerhub.models.user import User
from careerhub.utils.constants import UserRole

# Missing credentials are reported by get_current_user, not by HTTPBearer
security = HTTPBearer(auto_error=False)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def token_lifetime(remember_me: bool = False) -> timedelta:
    if remember_me:
        return timedelta(days=settings.REMEMBER_ME_EXPIRE_DAYS)
    return timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)


def create_user_token(user: User, remember_me: bool = False) -> str:
    """Issue an access token for ``user``; remember-me tokens live longer."""
    return create_access_token(
        {"sub": str(user.id), "role": user.role, "email": user.email},
        expires_delta=token_lifetime(remember_me),
    )


def decode_token(token: str) -> dict:
    """Decode and verify JWT token."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise Unauthorized("Could not validate credentials")
    if payload.get("type") != "access":
        raise Unauthorized("Could not validate credentials")
    return payload


async def _load_user(db: AsyncSession, token: str) -> User:
    payload = decode_token(token)

    user_id = payload.get("sub")
    if user_id is None:
        raise Unauthorized("Could not validate credentials")

    result = await db.execute(select(User).where(User.id == _as_uuid(user_id)))
    user = result.scalar_one_or_none()

    if user is None:
        raise Unauthorized("User not found")

    if not user.is_active:
        raise Forbidden("Inactive user")

    return user


def _as_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except (TypeError, ValueError):
        raise Unauthorized("Could not validate credentials")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Get current authenticated user from Bearer token."""
    if credentials is None:
        raise Unauthorized()
    return await _load_user(db, credentials.credentials)


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """Like ``get_current_user`` but anonymous requests resolve to ``None``."""
    if credentials is None:
        return None
    return await _load_user(db, credentials.credentials)


def require_role(*allowed_roles: UserRole):
    """Dependency to check if user has one of the required roles."""

    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in {role.value for role in allowed_roles}:
            raise Forbidden(
                f"Insufficient permissions. Required: {[r.value for r in allowed_roles]}"
            )
        return current_user

    return role_checker


require_recruiter = require_role(UserRole.RECRUITER)
require_candidate = require_role(UserRole.CANDIDATE)

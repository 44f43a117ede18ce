"""Authentication endpoints."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from careerhub.api.deps import get_current_user, get_db
from careerhub.core.errors import Conflict, Forbidden, Unauthorized, ValidationFailed
from careerhub.core.security import (
    create_user_token,
    get_password_hash,
    token_lifetime,
    verify_password,
)
from careerhub.models.candidate_profile import CandidateProfile
from careerhub.models.user import User
from careerhub.schemas.auth import AuthData, LoginRequest, SignupRequest, UserResponse
from careerhub.schemas.candidate import CandidateProfileResponse
from careerhub.schemas.common import ApiResponse
from careerhub.services.candidate_service import profile_payload
from careerhub.utils.constants import UserRole

logger = structlog.get_logger(__name__)

router = APIRouter()


def _auth_data(
    user: User, profile: Optional[CandidateProfile], remember_me: bool = False
) -> AuthData:
    return AuthData(
        user_id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        token=create_user_token(user, remember_me),
        expires_in=int(token_lifetime(remember_me).total_seconds()),
        profile=CandidateProfileResponse.model_validate(profile_payload(profile, user))
        if profile is not None
        else None,
    )


@router.post("/signup", response_model=ApiResponse[AuthData], status_code=status.HTTP_201_CREATED)
async def signup(request: SignupRequest, db: AsyncSession = Depends(get_db)):
    """Register a recruiter or a candidate; candidates get a profile straight away."""
    errors = request.cross_field_errors()
    if errors:
        raise ValidationFailed("Invalid signup data", errors)

    email = request.email.lower()
    result = await db.execute(select(User).where(func.lower(User.email) == email))
    if result.scalar_one_or_none() is not None:
        raise Conflict("An account with this email already exists")

    user = User(
        email=email,
        password_hash=get_password_hash(request.password),
        name=f"{request.first_name.strip()} {request.last_name.strip()}",
        phone=request.phone,
        company=request.company if request.looking_for == UserRole.RECRUITER else None,
        role=request.looking_for.value,
        is_active=True,
    )
    db.add(user)

    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        logger.info("signup_email_conflict", email=email)
        raise Conflict("An account with this email already exists")

    profile = None
    if request.looking_for == UserRole.CANDIDATE:
        profile = CandidateProfile(
            user_id=user.id,
            skills=[],
            available_for_work=True,
            is_new_to_experience=request.is_new_to_experience,
            years_of_experience=None if request.is_new_to_experience else request.years_of_experience,
            companies=[] if request.is_new_to_experience else [c.name for c in request.companies],
            designations=[] if request.is_new_to_experience else [c.designation for c in request.companies],
            looking_for_roles=request.looking_for_roles,
        )
        db.add(profile)
        await db.flush()

    logger.info("user_signed_up", user_id=str(user.id), role=user.role)
    return ApiResponse(data=_auth_data(user, profile))


@router.post("/login", response_model=ApiResponse[AuthData])
async def login(request: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Login with email and password."""
    email = request.email_or_username.strip().lower()
    result = await db.execute(select(User).where(func.lower(User.email) == email))
    user = result.scalar_one_or_none()

    if not user or not verify_password(request.password, user.password_hash):
        logger.info("login_failed", email=email)
        raise Unauthorized("Invalid email or password")

    if not user.is_active:
        raise Forbidden("User account is inactive")

    profile = None
    if user.role == UserRole.CANDIDATE.value:
        result = await db.execute(
            select(CandidateProfile).where(CandidateProfile.user_id == user.id)
        )
        profile = result.scalar_one_or_none()

    logger.info("user_logged_in", user_id=str(user.id), remember_me=request.remember_me)
    return ApiResponse(data=_auth_data(user, profile, request.remember_me))


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current user info."""
    return ApiResponse(data=UserResponse.model_validate(current_user))

"""Candidate profiles."""

from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from careerhub.core.errors import Forbidden, NotFound
from careerhub.models.candidate_profile import CandidateProfile
from careerhub.models.user import User
from careerhub.schemas.candidate import CandidateProfileUpdate

logger = structlog.get_logger(__name__)


def profile_payload(profile: CandidateProfile, user: User) -> dict:
    """Flatten a profile and its user into the public profile shape."""
    return {
        "id": profile.id,
        "user_id": profile.user_id,
        "name": user.name,
        "email": user.email,
        "phone": user.phone,
        "resume": profile.resume,
        "skills": profile.skills or [],
        "experience": profile.experience,
        "education": profile.education,
        "location": profile.location,
        "available_for_work": profile.available_for_work
        if profile.available_for_work is not None
        else True,
        "is_new_to_experience": bool(profile.is_new_to_experience),
        "years_of_experience": profile.years_of_experience,
        "companies": profile.companies or [],
        "designations": profile.designations or [],
        "looking_for_roles": profile.looking_for_roles or [],
        "member_since": user.created_at,
    }


class CandidateService:
    """Service for candidate profiles."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_profile(self, user_id: UUID) -> dict:
        """Public profile of a candidate."""
        result = await self.db.execute(
            select(CandidateProfile)
            .options(selectinload(CandidateProfile.user))
            .where(CandidateProfile.user_id == user_id)
        )
        profile = result.scalar_one_or_none()
        if profile is None:
            raise NotFound("Candidate profile not found")
        return profile_payload(profile, profile.user)

    async def update_profile(self, user_id: UUID, data: CandidateProfileUpdate, current_user: User) -> dict:
        """
        Replace the caller's own profile fields, creating the profile on first update.

        ``name`` and ``phone`` live on the user and only change when supplied.
        """
        if current_user.id != user_id:
            raise Forbidden("You can only update your own profile")

        if data.name:
            current_user.name = data.name
        if data.phone:
            current_user.phone = data.phone

        result = await self.db.execute(
            select(CandidateProfile).where(CandidateProfile.user_id == user_id)
        )
        profile = result.scalar_one_or_none()
        created = profile is None
        if created:
            profile = CandidateProfile(user_id=user_id)
            self.db.add(profile)

        profile.resume = data.resume
        profile.skills = data.skills
        profile.experience = data.experience
        profile.education = data.education
        profile.location = data.location
        profile.available_for_work = data.available_for_work
        profile.is_new_to_experience = data.is_new_to_experience
        profile.years_of_experience = data.years_of_experience
        profile.companies = data.companies
        profile.designations = data.designations
        profile.looking_for_roles = data.looking_for_roles

        await self.db.flush()
        logger.info("candidate_profile_saved", user_id=str(user_id), created=created)
        return profile_payload(profile, current_user)

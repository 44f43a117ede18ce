"""Company branding (career pages)."""

from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from careerhub.core.errors import Conflict, Forbidden, NotFound
from careerhub.models.company_branding import CompanyBranding
from careerhub.models.job import Job
from careerhub.models.user import User
from careerhub.schemas.branding import BrandingUpsert

logger = structlog.get_logger(__name__)


class BrandingService:
    """Service for recruiters' career pages."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_user(self, user: User) -> List[CompanyBranding]:
        result = await self.db.execute(
            select(CompanyBranding)
            .where(CompanyBranding.user_id == user.id)
            .order_by(CompanyBranding.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_owned(self, branding_id: UUID, user: User) -> CompanyBranding:
        branding = await self.db.get(CompanyBranding, branding_id)
        if branding is None:
            raise NotFound("Company branding not found")
        if branding.user_id != user.id:
            raise Forbidden("You do not manage this company")
        return branding

    async def get_by_slug(self, slug: str, published_only: bool = True) -> CompanyBranding:
        query = select(CompanyBranding).where(CompanyBranding.company_slug == slug)
        if published_only:
            query = query.where(CompanyBranding.is_published.is_(True))
        branding = (await self.db.execute(query)).scalar_one_or_none()
        if branding is None:
            raise NotFound("Career page not found")
        return branding

    async def get_career_page(self, slug: str) -> Tuple[CompanyBranding, List[Job]]:
        """A published career page and its active jobs, newest first."""
        branding = await self.get_by_slug(slug)
        result = await self.db.execute(
            select(Job)
            .options(selectinload(Job.company_branding))
            .where(Job.company_branding_id == branding.id, Job.is_active.is_(True))
            .order_by(Job.posted_at.desc(), Job.id.desc())
        )
        return branding, list(result.scalars().all())

    async def is_slug_available(self, slug: str, user: Optional[User] = None) -> bool:
        """A slug is available when unused or already owned by ``user``."""
        existing = (
            await self.db.execute(
                select(CompanyBranding).where(CompanyBranding.company_slug == slug)
            )
        ).scalar_one_or_none()
        if existing is None:
            return True
        return user is not None and existing.user_id == user.id

    async def upsert(self, user: User, data: BrandingUpsert) -> Tuple[CompanyBranding, bool]:
        """
        Create or update the caller's branding identified by its slug.

        Returns:
            (branding, created)

        Raises:
            Conflict: the slug belongs to another recruiter
        """
        result = await self.db.execute(
            select(CompanyBranding).where(CompanyBranding.company_slug == data.company_slug)
        )
        branding = result.scalar_one_or_none()
        if branding is not None and branding.user_id != user.id:
            raise Conflict("Company slug is already taken")

        created = branding is None
        was_published = bool(branding and branding.is_published)
        if created:
            branding = CompanyBranding(user_id=user.id)
            self.db.add(branding)

        branding.company_name = data.company_name
        branding.company_slug = data.company_slug
        branding.logo_url = data.logo_url
        branding.banner_url = data.banner_url
        branding.culture_video_url = data.culture_video_url
        branding.primary_color = data.primary_color
        branding.secondary_color = data.secondary_color
        branding.accent_color = data.accent_color
        branding.sections = [section.model_dump(mode="json") for section in data.sections]

        if data.is_published is not None:
            branding.is_published = data.is_published
        elif created:
            branding.is_published = False
        if data.is_published and not was_published:
            branding.published_at = datetime.utcnow()

        user_id = str(user.id)
        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            logger.warning("branding_slug_conflict", slug=data.company_slug, user_id=user_id)
            raise Conflict("Company slug is already taken")

        logger.info(
            "branding_saved",
            branding_id=str(branding.id),
            slug=branding.company_slug,
            created=created,
        )
        return branding, created

    async def set_published(self, branding_id: UUID, is_published: bool, user: User) -> CompanyBranding:
        branding = await self.get_owned(branding_id, user)
        branding.is_published = is_published
        branding.published_at = datetime.utcnow() if is_published else None
        await self.db.flush()
        logger.info("branding_publish_changed", branding_id=str(branding.id), is_published=is_published)
        return branding

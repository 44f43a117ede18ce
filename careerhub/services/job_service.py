"""Job postings: listing, detail, upsert and facet metadata."""

import uuid
from enum import Enum
from typing import Dict, List, Optional, Tuple
from uuid import UUID

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from careerhub.core.errors import Forbidden, NotFound, ValidationFailed
from careerhub.models.company_branding import CompanyBranding
from careerhub.models.job import Job
from careerhub.models.user import User
from careerhub.schemas.job import JobForm, JobUpdate
from careerhub.schemas.job_filters import JobSearchParams
from careerhub.services.job_query import build_job_conditions, order_clause
from careerhub.utils.constants import UserRole
from careerhub.utils.helpers import job_application_url, slugify
from careerhub.utils.pagination import Pagination

logger = structlog.get_logger(__name__)

# Columns that never hold NULL; an explicit null in a partial update is ignored
NON_NULLABLE_FIELDS = {
    "title",
    "location",
    "job_type",
    "experience_level",
    "employment_type",
    "is_active",
    "technical_requirements",
    "soft_skills",
    "responsibilities",
    "benefits",
    "salary_currency",
}


def _column_values(data: dict) -> dict:
    return {key: value.value if isinstance(value, Enum) else value for key, value in data.items()}


class JobService:
    """Service for job postings."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_jobs(
        self, params: JobSearchParams, viewer: Optional[User] = None
    ) -> Tuple[List[Job], int, Pagination]:
        """
        Page through jobs matching ``params``.

        The owning recruiter of ``params.company_branding_id`` also sees that
        company's inactive jobs; everyone else only sees active ones.

        Returns:
            (jobs on the requested page, total matches, pagination window)
        """
        include_drafts = False
        if viewer is not None and params.company_branding_id is not None:
            include_drafts = await self._owns_branding(params.company_branding_id, viewer)

        conditions = build_job_conditions(params, include_drafts=include_drafts)
        pagination = Pagination(page=params.page, limit=params.limit)

        total = (
            await self.db.execute(select(func.count()).select_from(Job).where(*conditions))
        ).scalar_one()

        # Past the last page; the offset may not even fit a BIGINT
        if pagination.offset >= total:
            return [], total, pagination

        result = await self.db.execute(
            select(Job)
            .options(selectinload(Job.company_branding))
            .where(*conditions)
            .order_by(*order_clause(params.sort_by))
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        return list(result.scalars().all()), total, pagination

    async def get_job(self, job_id: UUID) -> Job:
        """Fetch a job with its company, or raise ``NotFound``."""
        result = await self.db.execute(
            select(Job)
            .options(selectinload(Job.company_branding))
            .where(Job.id == job_id)
            .execution_options(populate_existing=True)
        )
        job = result.scalar_one_or_none()
        if job is None:
            raise NotFound("Job not found")
        return job

    async def upsert_job(self, form: JobForm, owner: User) -> Job:
        """
        Create or update a job by id.

        An existing job owned by ``owner`` is overwritten with the form; an
        unknown id (or no id) creates a new job, keeping the supplied id.
        Posting the same form twice leaves one row holding the latest values.
        """
        branding = await self._owned_branding(form.company_branding_id, owner)

        job_id = form.id or uuid.uuid4()
        job = await self.db.get(Job, job_id)
        if job is not None:
            await self._owned_branding(job.company_branding_id, owner)

        values = _column_values(form.model_dump(exclude={"id"}))
        values.update(
            career_slug=slugify(form.title),
            application_url=job_application_url(branding.company_slug, job_id),
            skills=[*form.technical_requirements, *form.soft_skills],
        )

        created = job is None
        if created:
            job = Job(id=job_id, **values)
            self.db.add(job)
        else:
            for field, value in values.items():
                setattr(job, field, value)

        await self.db.flush()
        logger.info(
            "job_upserted",
            job_id=str(job_id),
            company_branding_id=str(branding.id),
            created=created,
            is_active=job.is_active,
        )
        return job

    async def update_job(self, job_id: UUID, update: JobUpdate, owner: User) -> Job:
        """Apply a partial update to a job owned by ``owner``."""
        job = await self.get_job(job_id)
        branding = await self._owned_branding(job.company_branding_id, owner)

        changes = {
            field: value
            for field, value in update.model_dump(exclude_unset=True).items()
            if value is not None or field not in NON_NULLABLE_FIELDS
        }

        salary_min = changes.get("salary_min", job.salary_min)
        salary_max = changes.get("salary_max", job.salary_max)
        if salary_min is not None and salary_max is not None and salary_max < salary_min:
            raise ValidationFailed(
                "Validation failed",
                {"salaryMax": ["Maximum salary must be greater than or equal to minimum salary"]},
            )

        for field, value in _column_values(changes).items():
            setattr(job, field, value)

        if "title" in changes:
            job.career_slug = slugify(job.title)
        if "technical_requirements" in changes or "soft_skills" in changes:
            job.skills = [*(job.technical_requirements or []), *(job.soft_skills or [])]
        job.application_url = job_application_url(branding.company_slug, job.id)

        await self.db.flush()
        logger.info("job_updated", job_id=str(job.id), fields=sorted(changes))
        return await self.get_job(job.id)

    async def set_job_active(self, job_id: UUID, is_active: bool, owner: User) -> Job:
        """Publish or unpublish a job owned by ``owner``."""
        job = await self.get_job(job_id)
        await self._owned_branding(job.company_branding_id, owner)

        job.is_active = is_active
        await self.db.flush()
        logger.info("job_status_changed", job_id=str(job.id), is_active=is_active)
        return job

    async def get_unique_locations(self) -> List[str]:
        """Distinct locations of active jobs on published career pages."""
        result = await self.db.execute(
            select(Job.location)
            .join(Job.company_branding)
            .where(Job.is_active.is_(True), CompanyBranding.is_published.is_(True))
            .distinct()
            .order_by(Job.location)
        )
        return list(result.scalars().all())

    async def get_unique_departments(self) -> List[str]:
        result = await self.db.execute(
            select(Job.department)
            .join(Job.company_branding)
            .where(
                Job.is_active.is_(True),
                Job.department.is_not(None),
                CompanyBranding.is_published.is_(True),
            )
            .distinct()
            .order_by(Job.department)
        )
        return list(result.scalars().all())

    async def get_job_counts_by_type(self) -> Dict[str, int]:
        """Active job count per job type on published career pages."""
        result = await self.db.execute(
            select(Job.job_type, func.count(Job.id))
            .join(Job.company_branding)
            .where(Job.is_active.is_(True), CompanyBranding.is_published.is_(True))
            .group_by(Job.job_type)
        )
        return {job_type: count for job_type, count in result.all()}

    async def _owns_branding(self, branding_id: UUID, user: User) -> bool:
        if user.role != UserRole.RECRUITER.value:
            return False
        branding = await self.db.get(CompanyBranding, branding_id)
        return branding is not None and branding.user_id == user.id

    async def _owned_branding(self, branding_id: UUID, owner: User) -> CompanyBranding:
        branding = await self.db.get(CompanyBranding, branding_id)
        if branding is None:
            raise NotFound("Company branding not found")
        if branding.user_id != owner.id:
            raise Forbidden("You do not manage this company")
        return branding

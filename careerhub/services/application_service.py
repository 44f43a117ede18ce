"""
Job applications.

One application per (job, candidate email): the lookup before insert answers
the common case, and the ``uq_job_applications_job_candidate`` constraint
settles concurrent submissions.
"""

from datetime import datetime, timedelta
from typing import List, Optional, Tuple
from uuid import UUID

import structlog
from sqlalchemy import case, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from careerhub.core.errors import DuplicateApplication, Forbidden, NotFound, ValidationFailed
from careerhub.models.application import JobApplication
from careerhub.models.candidate_profile import CandidateProfile
from careerhub.models.company_branding import CompanyBranding
from careerhub.models.job import Job
from careerhub.models.user import User
from careerhub.schemas.application import ApplyRequest
from careerhub.utils.constants import (
    APPLICATION_STATUS_TRANSITIONS,
    INACTIVE_APPLICATION_STATUSES,
    ApplicationStatus,
)
from careerhub.utils.helpers import candidate_public_profile_url

logger = structlog.get_logger(__name__)

RECENT_APPLICATIONS_WINDOW = timedelta(days=7)


def can_transition(current: ApplicationStatus, new: ApplicationStatus) -> bool:
    """Whether an application in ``current`` may move to ``new``."""
    return new in APPLICATION_STATUS_TRANSITIONS[current]


class ApplicationService:
    """Service for submitting and tracking job applications."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def apply(
        self, job_id: UUID, candidate: User, request: Optional[ApplyRequest] = None
    ) -> Tuple[JobApplication, Job]:
        """
        Submit ``candidate``'s application to an active job.

        Raises:
            NotFound: the job does not exist or is not active
            DuplicateApplication: the candidate already applied to this job
        """
        request = request or ApplyRequest()

        job = (
            await self.db.execute(
                select(Job).options(selectinload(Job.company_branding)).where(Job.id == job_id)
            )
        ).scalar_one_or_none()
        if job is None or not job.is_active:
            raise NotFound("Job not found")

        if await self._find(job_id, candidate.email) is not None:
            logger.info("duplicate_application_rejected", job_id=str(job_id), user_id=str(candidate.id))
            raise DuplicateApplication()

        profile = (
            await self.db.execute(
                select(CandidateProfile).where(CandidateProfile.user_id == candidate.id)
            )
        ).scalar_one_or_none()

        application = JobApplication(
            job_id=job.id,
            candidate_name=candidate.name or candidate.email,
            candidate_email=candidate.email,
            candidate_phone=request.candidate_phone or candidate.phone,
            candidate_profile_url=candidate_public_profile_url(candidate.id) if profile else None,
            resume_url=profile.resume if profile else None,
            cover_letter=request.cover_letter,
            status=ApplicationStatus.APPLIED.value,
            applied_at=datetime.utcnow(),
        )
        self.db.add(application)
        # Session state is expired on rollback; keep plain ids for logging
        user_id = str(candidate.id)

        try:
            await self.db.flush()
        except IntegrityError:
            # Lost a race with a concurrent submission of the same pair
            await self.db.rollback()
            logger.info("duplicate_application_rejected", job_id=str(job_id), user_id=user_id)
            raise DuplicateApplication()

        logger.info(
            "application_submitted",
            application_id=str(application.id),
            job_id=str(job.id),
            user_id=str(candidate.id),
        )
        return application, job

    async def change_status(
        self, application_id: UUID, status: ApplicationStatus, recruiter: User
    ) -> JobApplication:
        """Move an application along its lifecycle on behalf of the job's owner."""
        application = await self._get(application_id)
        if application.job.company_branding.user_id != recruiter.id:
            raise Forbidden("You do not manage this job")
        return await self._transition(application, status)

    async def withdraw(self, application_id: UUID, candidate: User) -> JobApplication:
        application = await self._get(application_id)
        if application.candidate_email != candidate.email:
            raise Forbidden("This application belongs to another candidate")
        return await self._transition(application, ApplicationStatus.WITHDRAWN)

    async def candidate_stats(self, email: str) -> dict:
        inactive = [status.value for status in INACTIVE_APPLICATION_STATUSES]
        result = await self.db.execute(
            select(
                func.count(JobApplication.id),
                func.coalesce(func.sum(case((JobApplication.status.not_in(inactive), 1), else_=0)), 0),
                func.coalesce(
                    func.sum(
                        case((JobApplication.status == ApplicationStatus.INTERVIEWING.value, 1), else_=0)
                    ),
                    0,
                ),
                func.coalesce(
                    func.sum(case((JobApplication.status == ApplicationStatus.OFFERED.value, 1), else_=0)),
                    0,
                ),
            ).where(JobApplication.candidate_email == email)
        )
        total, active, interviewing, offers = result.one()
        return {
            "total_applications": total,
            "active_applications": active,
            "interviewing_count": interviewing,
            "offers_received": offers,
        }

    async def candidate_applications(self, email: str, limit: int = 10) -> List[dict]:
        """Most recent applications of a candidate with job and company names."""
        result = await self.db.execute(
            select(JobApplication, Job, CompanyBranding.company_name)
            .join(Job, JobApplication.job_id == Job.id)
            .join(CompanyBranding, Job.company_branding_id == CompanyBranding.id)
            .where(JobApplication.candidate_email == email)
            .order_by(JobApplication.applied_at.desc(), JobApplication.id.desc())
            .limit(limit)
        )
        return [
            {
                "id": application.id,
                "job_id": job.id,
                "job_title": job.title,
                "company_name": company_name,
                "status": application.status,
                "applied_at": application.applied_at,
                "location": job.location,
                "job_type": job.job_type,
            }
            for application, job, company_name in result.all()
        ]

    async def job_applicants(self, job_id: UUID, recruiter: User) -> Tuple[Job, List[dict]]:
        """Applications to a recruiter's job, joined with each candidate's profile."""
        job = (
            await self.db.execute(
                select(Job).options(selectinload(Job.company_branding)).where(Job.id == job_id)
            )
        ).scalar_one_or_none()
        if job is None:
            raise NotFound("Job not found")
        if job.company_branding.user_id != recruiter.id:
            raise Forbidden("You do not manage this job")

        result = await self.db.execute(
            select(JobApplication, CandidateProfile)
            .outerjoin(User, User.email == JobApplication.candidate_email)
            .outerjoin(CandidateProfile, CandidateProfile.user_id == User.id)
            .where(JobApplication.job_id == job_id)
            .order_by(JobApplication.applied_at.desc(), JobApplication.id.desc())
        )

        applicants = []
        for application, profile in result.all():
            applicants.append(
                {
                    "id": application.id,
                    "candidate_name": application.candidate_name,
                    "candidate_email": application.candidate_email,
                    "candidate_phone": application.candidate_phone,
                    "candidate_profile_url": application.candidate_profile_url,
                    "resume_url": application.resume_url,
                    "cover_letter": application.cover_letter,
                    "status": application.status,
                    "applied_at": application.applied_at,
                    "skills": (profile.skills if profile else None) or [],
                    "experience": profile.experience if profile else None,
                    "location": profile.location if profile else None,
                    "is_new_to_experience": bool(profile and profile.is_new_to_experience),
                    "years_of_experience": profile.years_of_experience if profile else None,
                    "companies": (profile.companies if profile else None) or [],
                    "designations": (profile.designations if profile else None) or [],
                    "looking_for_roles": (profile.looking_for_roles if profile else None) or [],
                }
            )
        return job, applicants

    async def recent_count_for_recruiter(self, user: User) -> int:
        """Applications received in the last week across the recruiter's jobs."""
        since = datetime.utcnow() - RECENT_APPLICATIONS_WINDOW
        result = await self.db.execute(
            select(func.count(JobApplication.id))
            .join(Job, JobApplication.job_id == Job.id)
            .join(CompanyBranding, Job.company_branding_id == CompanyBranding.id)
            .where(CompanyBranding.user_id == user.id, JobApplication.applied_at >= since)
        )
        return result.scalar_one()

    async def _find(self, job_id: UUID, email: str) -> Optional[JobApplication]:
        result = await self.db.execute(
            select(JobApplication).where(
                JobApplication.job_id == job_id,
                JobApplication.candidate_email == email,
            )
        )
        return result.scalar_one_or_none()

    async def _get(self, application_id: UUID) -> JobApplication:
        result = await self.db.execute(
            select(JobApplication)
            .options(selectinload(JobApplication.job).selectinload(Job.company_branding))
            .where(JobApplication.id == application_id)
        )
        application = result.scalar_one_or_none()
        if application is None:
            raise NotFound("Application not found")
        return application

    async def _transition(self, application: JobApplication, status: ApplicationStatus) -> JobApplication:
        current = ApplicationStatus(application.status)
        if not can_transition(current, status):
            raise ValidationFailed(
                "Invalid status transition",
                {"status": [f"Cannot change status from {current.value} to {status.value}"]},
            )
        application.status = status.value
        await self.db.flush()
        logger.info(
            "application_status_changed",
            application_id=str(application.id),
            from_status=current.value,
            to_status=status.value,
        )
        return application

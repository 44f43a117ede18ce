"""
API Dependencies
Common dependencies for API endpoints (database session, services, current user).
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from careerhub.core.security import (  # noqa: F401
    get_current_user,
    get_current_user_optional,
    require_candidate,
    require_recruiter,
)
from careerhub.db.session import get_db
from careerhub.services.application_service import ApplicationService
from careerhub.services.branding_service import BrandingService
from careerhub.services.candidate_service import CandidateService
from careerhub.services.dashboard_service import DashboardService
from careerhub.services.job_service import JobService


def get_job_service(db: AsyncSession = Depends(get_db)) -> JobService:
    return JobService(db)


def get_branding_service(db: AsyncSession = Depends(get_db)) -> BrandingService:
    return BrandingService(db)


def get_application_service(db: AsyncSession = Depends(get_db)) -> ApplicationService:
    return ApplicationService(db)


def get_candidate_service(db: AsyncSession = Depends(get_db)) -> CandidateService:
    return CandidateService(db)


def get_dashboard_service(db: AsyncSession = Depends(get_db)) -> DashboardService:
    return DashboardService(db)

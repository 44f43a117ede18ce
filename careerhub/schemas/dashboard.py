"""Recruiter dashboard schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from careerhub.schemas.common import CamelModel
from careerhub.utils.constants import ExperienceLevel, JobType


class DashboardJob(CamelModel):
    id: UUID
    title: str
    location: str
    job_type: JobType
    experience_level: ExperienceLevel
    is_active: bool
    posted_at: datetime
    expires_at: Optional[datetime] = None
    application_count: int
    company_name: str
    company_slug: str
    career_slug: Optional[str] = None


class DashboardStats(CamelModel):
    total_jobs: int
    active_jobs: int
    total_applications: int
    recent_applications: int


class DashboardData(CamelModel):
    jobs: List[DashboardJob]
    stats: DashboardStats
    total: int
    page: int
    limit: int
    total_pages: int


class JobStatusToggle(CamelModel):
    """Body of ``POST /api/recruiter/dashboard``."""

    job_id: UUID
    is_active: bool


class JobStatusResult(CamelModel):
    id: UUID
    is_active: bool

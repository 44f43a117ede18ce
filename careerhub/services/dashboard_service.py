"""Recruiter dashboard: own jobs with application counts and summary figures."""

from typing import List, Tuple

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from careerhub.models.application import JobApplication
from careerhub.models.company_branding import CompanyBranding
from careerhub.models.job import Job
from careerhub.models.user import User
from careerhub.schemas.job_filters import DashboardFilters
from careerhub.services.application_service import ApplicationService
from careerhub.services.job_query import (
    application_count_expr,
    build_dashboard_conditions,
    order_clause,
)
from careerhub.utils.pagination import Pagination


class DashboardService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_dashboard(
        self, filters: DashboardFilters, recruiter: User
    ) -> Tuple[List[dict], dict, int, Pagination]:
        """
        One page of the recruiter's jobs plus statistics.

        ``totalJobs``, ``activeJobs`` and ``totalApplications`` cover every job
        matching the filters; ``recentApplications`` counts the last seven days
        across all of the recruiter's jobs.
        """
        conditions = build_dashboard_conditions(filters, recruiter.id)
        pagination = Pagination(page=filters.page, limit=filters.limit)

        total_jobs, active_jobs = (
            await self.db.execute(
                select(
                    func.count(Job.id),
                    func.coalesce(func.sum(case((Job.is_active.is_(True), 1), else_=0)), 0),
                ).where(*conditions)
            )
        ).one()

        total_applications = (
            await self.db.execute(
                select(func.count(JobApplication.id))
                .join(Job, JobApplication.job_id == Job.id)
                .where(*conditions)
            )
        ).scalar_one()

        recent_applications = await ApplicationService(self.db).recent_count_for_recruiter(recruiter)
        stats = {
            "total_jobs": total_jobs,
            "active_jobs": active_jobs,
            "total_applications": total_applications,
            "recent_applications": recent_applications,
        }
        if pagination.offset >= total_jobs:
            return [], stats, total_jobs, pagination

        count_column = application_count_expr().label("application_count")
        result = await self.db.execute(
            select(Job, count_column, CompanyBranding.company_name, CompanyBranding.company_slug)
            .join(CompanyBranding, Job.company_branding_id == CompanyBranding.id)
            .where(*conditions)
            .order_by(*order_clause(filters.sort_by))
            .offset(pagination.offset)
            .limit(pagination.limit)
        )

        jobs = [
            {
                "id": job.id,
                "title": job.title,
                "location": job.location,
                "job_type": job.job_type,
                "experience_level": job.experience_level,
                "is_active": job.is_active,
                "posted_at": job.posted_at,
                "expires_at": job.expires_at,
                "application_count": application_count,
                "company_name": company_name,
                "company_slug": company_slug,
                "career_slug": job.career_slug,
            }
            for job, application_count, company_name, company_slug in result.all()
        ]
        return jobs, stats, total_jobs, pagination

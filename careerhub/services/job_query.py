"""
Job listing query composition.

Turns validated filter objects into SQLAlchemy predicates and ORDER BY
clauses. Nothing here touches a session; callers combine the pieces with
``select(Job)`` and execute them.
"""

import json
from typing import List, Optional
from uuid import UUID

from sqlalchemy import String, and_, cast, func, or_, select
from sqlalchemy.sql.elements import ColumnElement

from careerhub.models.application import JobApplication
from careerhub.models.company_branding import CompanyBranding
from careerhub.models.job import Job
from careerhub.schemas.job_filters import DashboardFilters, JobSearchParams
from careerhub.utils.constants import JobSortKey


def application_count_expr():
    """Correlated count of applications for the enclosing ``Job`` row."""
    return (
        select(func.count(JobApplication.id))
        .where(JobApplication.job_id == Job.id)
        .correlate(Job)
        .scalar_subquery()
    )


def skills_contain(term: str) -> ColumnElement:
    """Case-insensitive exact membership of ``term`` in the ``skills`` JSON list.

    Matches the quoted JSON string inside the serialized array so that
    ``"go"`` finds ``["Go"]`` but not ``["Google Ads"]``.
    """
    return cast(Job.skills, String).icontains(json.dumps(term, ensure_ascii=False), autoescape=True)


def build_job_conditions(
    params: JobSearchParams, include_drafts: bool = False
) -> List[ColumnElement]:
    """
    Build the WHERE conjunction for the public job listing.

    Args:
        params: Validated search parameters
        include_drafts: True when the caller owns ``params.company_branding_id``;
            inactive jobs of that company are then listed too

    Returns:
        List of predicates to AND together (possibly empty)
    """
    conditions: List[ColumnElement] = []

    if params.company_branding_id is not None:
        conditions.append(Job.company_branding_id == params.company_branding_id)

    if not (include_drafts and params.company_branding_id is not None):
        conditions.append(Job.is_active.is_(True))

    if params.search:
        term = params.search
        conditions.append(
            or_(
                Job.title.icontains(term, autoescape=True),
                Job.description.icontains(term, autoescape=True),
                skills_contain(term),
            )
        )

    if params.location:
        conditions.append(Job.location.icontains(params.location, autoescape=True))

    if params.job_type:
        conditions.append(Job.job_type.in_([value.value for value in params.job_type]))

    if params.experience_level:
        conditions.append(
            Job.experience_level.in_([value.value for value in params.experience_level])
        )

    if params.employment_type:
        conditions.append(
            Job.employment_type.in_([value.value for value in params.employment_type])
        )

    if params.department:
        conditions.append(Job.department.in_(params.department))

    return conditions


def build_dashboard_conditions(filters: DashboardFilters, user_id: UUID) -> List[ColumnElement]:
    """WHERE conjunction for a recruiter's own jobs."""
    branding_scope = [CompanyBranding.user_id == user_id]
    if filters.company_name:
        branding_scope.append(CompanyBranding.company_slug == filters.company_name)

    conditions: List[ColumnElement] = [
        Job.company_branding_id.in_(select(CompanyBranding.id).where(and_(*branding_scope)))
    ]

    if filters.search:
        term = filters.search
        conditions.append(
            or_(
                Job.title.icontains(term, autoescape=True),
                Job.location.icontains(term, autoescape=True),
                Job.description.icontains(term, autoescape=True),
            )
        )

    if filters.job_id:
        # Compare without hyphens; not every backend renders UUIDs with them
        fragment = filters.job_id.replace("-", "")
        conditions.append(
            func.replace(cast(Job.id, String), "-", "", type_=String).icontains(fragment, autoescape=True)
        )

    if filters.job_type:
        conditions.append(Job.job_type == filters.job_type.value)

    if filters.experience_level:
        conditions.append(Job.experience_level == filters.experience_level.value)

    if filters.is_active is not None:
        conditions.append(Job.is_active.is_(filters.is_active))

    if filters.date_from:
        conditions.append(Job.posted_at >= filters.date_from)

    if filters.date_to:
        conditions.append(Job.posted_at <= filters.date_to)

    return conditions


def order_clause(sort_key: Optional[JobSortKey]) -> list:
    """ORDER BY for a sort key; ``id`` is the final tie-breaker so pages are stable."""
    sort_key = sort_key or JobSortKey.DATE_DESC

    if sort_key == JobSortKey.DATE_ASC:
        return [Job.posted_at.asc(), Job.id.asc()]
    if sort_key == JobSortKey.TITLE_ASC:
        return [Job.title.asc(), Job.id.asc()]
    if sort_key == JobSortKey.TITLE_DESC:
        return [Job.title.desc(), Job.id.desc()]
    if sort_key == JobSortKey.APPLICATIONS_ASC:
        return [application_count_expr().asc(), Job.posted_at.desc(), Job.id.asc()]
    if sort_key == JobSortKey.APPLICATIONS_DESC:
        return [application_count_expr().desc(), Job.posted_at.desc(), Job.id.desc()]
    return [Job.posted_at.desc(), Job.id.desc()]

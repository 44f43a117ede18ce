"""Query-string filters for job listings.

Both listings receive raw query parameters (all strings) and turn them into
typed filter objects here, before any query is built. Empty values count as
absent so the defaults apply; anything else that does not validate is
reported back per field.
"""

from datetime import datetime
from typing import List, Mapping, Optional
from uuid import UUID

from pydantic import Field, ValidationError, field_validator

from careerhub.config import settings
from careerhub.core.errors import ValidationFailed, field_errors
from careerhub.schemas.common import CamelModel, to_naive_utc
from careerhub.utils.constants import EmploymentType, ExperienceLevel, JobSortKey, JobType


def split_csv(value: str) -> List[str]:
    """Split a comma-separated value, trimming members and dropping empties."""
    return [part.strip() for part in value.split(",") if part.strip()]


class JobSearchParams(CamelModel):
    """Validated filters for ``GET /api/jobs``."""

    search: Optional[str] = Field(None, max_length=200)
    location: Optional[str] = Field(None, max_length=100)
    job_type: List[JobType] = Field(default_factory=list)
    experience_level: List[ExperienceLevel] = Field(default_factory=list)
    employment_type: List[EmploymentType] = Field(default_factory=list)
    department: List[str] = Field(default_factory=list)
    company_branding_id: Optional[UUID] = None
    sort_by: JobSortKey = JobSortKey.DATE_DESC
    page: int = Field(1, ge=1)
    limit: int = Field(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE)

    @field_validator("job_type", "experience_level", "employment_type", mode="before")
    @classmethod
    def split_enum_list(cls, value):
        # Enum members are matched case-insensitively
        if isinstance(value, str):
            return [part.upper() for part in split_csv(value)]
        return value

    @field_validator("department", mode="before")
    @classmethod
    def split_department(cls, value):
        if isinstance(value, str):
            return split_csv(value)
        return value

    @field_validator("sort_by", mode="before")
    @classmethod
    def lower_sort_key(cls, value):
        if isinstance(value, str):
            return value.lower()
        return value


class DashboardFilters(CamelModel):
    """Validated filters for the recruiter dashboard."""

    search: Optional[str] = Field(None, max_length=200)
    job_id: Optional[str] = Field(None, max_length=100)
    job_type: Optional[JobType] = None
    experience_level: Optional[ExperienceLevel] = None
    is_active: Optional[bool] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    company_name: Optional[str] = Field(None, max_length=50)  # branding slug
    sort_by: JobSortKey = JobSortKey.DATE_DESC
    page: int = Field(1, ge=1)
    limit: int = Field(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE)

    @field_validator("job_type", "experience_level", mode="before")
    @classmethod
    def upper_enum(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value

    @field_validator("is_active", mode="before")
    @classmethod
    def parse_tri_state(cls, value):
        if isinstance(value, str):
            if value.lower() not in ("true", "false"):
                raise ValueError("isActive must be 'true' or 'false'")
            return value.lower() == "true"
        return value

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def expand_plain_dates(cls, value, info):
        # A bare date covers the whole day
        if isinstance(value, str) and len(value) == 10:
            return f"{value}T23:59:59.999999" if info.field_name == "date_to" else f"{value}T00:00:00"
        return value

    @field_validator("date_from", "date_to")
    @classmethod
    def normalize_dates(cls, value):
        return to_naive_utc(value)


def _clean_query(raw: Mapping[str, str]) -> dict:
    return {key: value.strip() for key, value in raw.items() if value is not None and value.strip()}


def parse_job_search_params(raw: Mapping[str, str]) -> JobSearchParams:
    """Validate raw query parameters or raise ``ValidationFailed`` with field details."""
    try:
        return JobSearchParams.model_validate(_clean_query(raw))
    except ValidationError as exc:
        raise ValidationFailed("Invalid search parameters", field_errors(exc))


def parse_dashboard_filters(raw: Mapping[str, str]) -> DashboardFilters:
    try:
        return DashboardFilters.model_validate(_clean_query(raw))
    except ValidationError as exc:
        raise ValidationFailed("Invalid filters", field_errors(exc))

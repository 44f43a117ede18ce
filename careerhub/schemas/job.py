"""Job schemas for API requests and responses."""

from datetime import datetime
from typing import Annotated, Dict, List, Optional
from uuid import UUID

from pydantic import EmailStr, Field, StringConstraints, ValidationInfo, field_validator

from careerhub.schemas.common import CamelModel, to_naive_utc
from careerhub.utils.constants import (
    DEFAULT_SALARY_CURRENCY,
    EmploymentType,
    ExperienceLevel,
    JobType,
)

ListItem = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)]
Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=150)]
Location = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
Department = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
Currency = Annotated[str, StringConstraints(strip_whitespace=True, to_upper=True, pattern=r"^[A-Za-z]{3}$")]


def _check_expiry(value: Optional[datetime]) -> Optional[datetime]:
    value = to_naive_utc(value)
    if value is not None and value <= datetime.utcnow():
        raise ValueError("Expiration date must be in the future")
    return value


class JobForm(CamelModel):
    """Body of ``POST /api/jobs`` (create-or-update by ``id``)."""

    id: Optional[UUID] = None
    company_branding_id: UUID
    is_active: bool = True

    title: Title
    location: Location
    job_type: JobType
    experience_level: ExperienceLevel
    employment_type: EmploymentType
    department: Optional[Department] = None
    description: Optional[str] = Field(None, max_length=5000)

    technical_requirements: List[ListItem] = Field(..., min_length=1, max_length=20)
    soft_skills: List[ListItem] = Field(..., min_length=1, max_length=15)
    responsibilities: List[ListItem] = Field(..., min_length=1, max_length=20)
    benefits: List[ListItem] = Field(default_factory=list, max_length=15)

    salary_min: Optional[int] = Field(None, gt=0)
    salary_max: Optional[int] = Field(None, gt=0)
    salary_currency: Currency = DEFAULT_SALARY_CURRENCY

    contact_email: Optional[EmailStr] = None
    expires_at: Optional[datetime] = None

    @field_validator("salary_max")
    @classmethod
    def check_salary_range(cls, value: Optional[int], info: ValidationInfo) -> Optional[int]:
        salary_min = info.data.get("salary_min")
        if value is not None and salary_min is not None and value < salary_min:
            raise ValueError("Maximum salary must be greater than or equal to minimum salary")
        return value

    @field_validator("expires_at")
    @classmethod
    def check_expires_at(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _check_expiry(value)


class JobUpdate(CamelModel):
    """Body of ``PUT /api/jobs/{id}``; only supplied fields change."""

    is_active: Optional[bool] = None
    title: Optional[Title] = None
    location: Optional[Location] = None
    job_type: Optional[JobType] = None
    experience_level: Optional[ExperienceLevel] = None
    employment_type: Optional[EmploymentType] = None
    department: Optional[Department] = None
    description: Optional[str] = Field(None, max_length=5000)
    technical_requirements: Optional[List[ListItem]] = Field(None, min_length=1, max_length=20)
    soft_skills: Optional[List[ListItem]] = Field(None, min_length=1, max_length=15)
    responsibilities: Optional[List[ListItem]] = Field(None, min_length=1, max_length=20)
    benefits: Optional[List[ListItem]] = Field(None, max_length=15)
    salary_min: Optional[int] = Field(None, gt=0)
    salary_max: Optional[int] = Field(None, gt=0)
    salary_currency: Optional[Currency] = None
    contact_email: Optional[EmailStr] = None
    expires_at: Optional[datetime] = None

    @field_validator("salary_max")
    @classmethod
    def check_salary_range(cls, value: Optional[int], info: ValidationInfo) -> Optional[int]:
        salary_min = info.data.get("salary_min")
        if value is not None and salary_min is not None and value < salary_min:
            raise ValueError("Maximum salary must be greater than or equal to minimum salary")
        return value

    @field_validator("expires_at")
    @classmethod
    def check_expires_at(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _check_expiry(value)


class CompanyBrief(CamelModel):
    """Brief company information embedded in job payloads."""

    id: UUID
    company_name: str
    company_slug: str
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    primary_color: str


class JobResponse(CamelModel):
    """Full job payload."""

    id: UUID
    company_branding_id: UUID
    title: str
    location: str
    job_type: JobType
    experience_level: ExperienceLevel
    employment_type: EmploymentType
    department: Optional[str] = None
    description: Optional[str] = None
    technical_requirements: List[str] = Field(default_factory=list)
    soft_skills: List[str] = Field(default_factory=list)
    responsibilities: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    salary_currency: Optional[str] = None
    contact_email: Optional[str] = None
    career_slug: Optional[str] = None
    application_url: Optional[str] = None
    is_active: bool
    posted_at: datetime
    expires_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    company_branding: Optional[CompanyBrief] = None

    @field_validator(
        "technical_requirements", "soft_skills", "responsibilities", "benefits", "skills",
        mode="before",
    )
    @classmethod
    def none_as_empty(cls, value):
        return value or []


class JobUpsertResult(CamelModel):
    id: UUID
    title: str
    career_slug: Optional[str] = None
    application_url: str = ""
    is_active: bool


class JobListMetadata(CamelModel):
    locations: List[str]
    departments: List[str] = Field(default_factory=list)
    job_type_counts: Dict[str, int]


class JobListData(CamelModel):
    """Paginated ``GET /api/jobs`` payload."""

    jobs: List[JobResponse]
    total: int
    page: int
    limit: int
    total_pages: int
    metadata: Optional[JobListMetadata] = None

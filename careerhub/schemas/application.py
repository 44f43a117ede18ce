"""Job application schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field, field_validator

from careerhub.schemas.common import CamelModel
from careerhub.utils.constants import ApplicationStatus, JobType
from careerhub.utils.validators import validate_phone


class ApplyRequest(CamelModel):
    """Optional body of ``POST /api/jobs/{id}/apply``."""

    candidate_phone: Optional[str] = Field(None, max_length=20)
    cover_letter: Optional[str] = Field(None, max_length=5000)

    @field_validator("candidate_phone")
    @classmethod
    def check_phone(cls, value: Optional[str]) -> Optional[str]:
        if value and not validate_phone(value):
            raise ValueError("Please enter a valid phone number")
        return value or None


class ApplyResult(CamelModel):
    application_id: UUID
    job_title: str
    company_name: str
    applied_at: datetime
    candidate_profile_url: Optional[str] = None


class StatusUpdate(CamelModel):
    status: ApplicationStatus


class ApplicationStatusResult(CamelModel):
    id: UUID
    job_id: UUID
    status: ApplicationStatus
    applied_at: datetime
    updated_at: Optional[datetime] = None


class JobApplicant(CamelModel):
    """An application as seen by the recruiter, with the candidate's profile."""

    id: UUID
    candidate_name: str
    candidate_email: str
    candidate_phone: Optional[str] = None
    candidate_profile_url: Optional[str] = None
    resume_url: Optional[str] = None
    cover_letter: Optional[str] = None
    status: ApplicationStatus
    applied_at: datetime

    skills: List[str] = Field(default_factory=list)
    experience: Optional[int] = None
    location: Optional[str] = None
    is_new_to_experience: bool = False
    years_of_experience: Optional[int] = None
    companies: List[str] = Field(default_factory=list)
    designations: List[str] = Field(default_factory=list)
    looking_for_roles: List[str] = Field(default_factory=list)


class JobInfo(CamelModel):
    id: UUID
    title: str
    company_name: str
    location: str


class JobApplicantsData(CamelModel):
    job: JobInfo
    applicants: List[JobApplicant]


class CandidateApplication(CamelModel):
    """One row of a candidate's application history."""

    id: UUID
    job_id: UUID
    job_title: str
    company_name: str
    status: ApplicationStatus
    applied_at: datetime
    location: str
    job_type: JobType

"""Candidate schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field, field_validator

from careerhub.schemas.common import CamelModel
from careerhub.utils.validators import validate_phone, validate_url


class CandidateStats(CamelModel):
    total_applications: int
    active_applications: int
    interviewing_count: int
    offers_received: int


class CandidateProfileResponse(CamelModel):
    id: UUID
    user_id: UUID
    name: Optional[str] = None
    email: str
    phone: Optional[str] = None
    resume: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    experience: Optional[int] = None
    education: Optional[str] = None
    location: Optional[str] = None
    available_for_work: bool = True
    is_new_to_experience: bool = False
    years_of_experience: Optional[int] = None
    companies: List[str] = Field(default_factory=list)
    designations: List[str] = Field(default_factory=list)
    looking_for_roles: List[str] = Field(default_factory=list)
    member_since: datetime


class CandidateProfileUpdate(CamelModel):
    """Body of ``PUT /api/candidate/{userId}/profile``."""

    name: Optional[str] = Field(None, min_length=2, max_length=255)
    phone: Optional[str] = Field(None, max_length=20)
    resume: Optional[str] = None
    skills: List[str] = Field(default_factory=list, max_length=50)
    experience: Optional[int] = Field(None, ge=0, le=50)
    education: Optional[str] = Field(None, max_length=2000)
    location: Optional[str] = Field(None, max_length=255)
    available_for_work: bool = True
    is_new_to_experience: bool = False
    years_of_experience: Optional[int] = Field(None, ge=0, le=50)
    companies: List[str] = Field(default_factory=list)
    designations: List[str] = Field(default_factory=list)
    looking_for_roles: List[str] = Field(default_factory=list)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value: Optional[str]) -> Optional[str]:
        if value and not validate_phone(value):
            raise ValueError("Please enter a valid phone number")
        return value or None

    @field_validator("resume")
    @classmethod
    def check_resume(cls, value: Optional[str]) -> Optional[str]:
        # Uploaded files live under the media URL, anything else must be absolute
        if value and not (value.startswith("/") or validate_url(value)):
            raise ValueError("Invalid resume URL")
        return value or None

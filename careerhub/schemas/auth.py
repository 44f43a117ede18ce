"""Authentication schemas."""

from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from careerhub.schemas.candidate import CandidateProfileResponse
from careerhub.schemas.common import CamelModel
from careerhub.utils.constants import UserRole
from careerhub.utils.validators import validate_password_strength, validate_phone

NAME_PATTERN = r"^[a-zA-Z\s]+$"


class WorkExperience(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    designation: str = Field(..., min_length=1, max_length=100)


class SignupRequest(CamelModel):
    """Signup request; candidates also describe their experience."""

    first_name: str = Field(..., min_length=2, max_length=50, pattern=NAME_PATTERN)
    last_name: str = Field(..., min_length=2, max_length=50, pattern=NAME_PATTERN)
    email: EmailStr
    phone: Optional[str] = Field(None, min_length=10, max_length=15)
    password: str = Field(..., max_length=100)
    confirm_password: str = Field(..., min_length=1)
    looking_for: UserRole
    company: Optional[str] = Field(None, max_length=100)

    # Candidate-specific fields
    is_new_to_experience: bool = False
    years_of_experience: Optional[int] = Field(None, ge=0, le=50)
    companies: List[WorkExperience] = Field(default_factory=list)
    looking_for_roles: List[str] = Field(default_factory=list)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not validate_phone(value):
            raise ValueError("Please enter a valid phone number")
        return value

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        is_valid, errors = validate_password_strength(value)
        if not is_valid:
            raise ValueError("; ".join(errors))
        return value

    def cross_field_errors(self) -> Dict[str, List[str]]:
        """Rules spanning several fields, keyed by the field they are reported on."""
        errors: Dict[str, List[str]] = {}
        if self.password != self.confirm_password:
            errors["confirmPassword"] = ["Passwords do not match"]
        if self.looking_for == UserRole.CANDIDATE:
            if not self.is_new_to_experience and (
                not self.companies or self.years_of_experience is None
            ):
                errors["companies"] = ["Please provide your work experience details"]
            if not self.looking_for_roles:
                errors["lookingForRoles"] = ["Please select at least one role you are looking for"]
        return errors


class LoginRequest(CamelModel):
    email_or_username: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    remember_me: bool = False


class AuthData(CamelModel):
    """Signup / login payload with the issued bearer token."""

    user_id: UUID
    email: str
    name: Optional[str] = None
    role: UserRole
    token: str
    token_type: str = "bearer"
    expires_in: int
    profile: Optional[CandidateProfileResponse] = None


class UserResponse(CamelModel):
    id: UUID
    email: str
    name: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    role: UserRole
    is_active: bool
    created_at: datetime

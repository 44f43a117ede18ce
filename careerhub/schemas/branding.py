"""Company branding (career page) schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field, field_validator

from careerhub.schemas.common import CamelModel
from careerhub.schemas.job import JobResponse
from careerhub.utils.constants import (
    DEFAULT_ACCENT_COLOR,
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
    SectionType,
)
from careerhub.utils.validators import validate_company_slug, validate_hex_color, validate_url


class ContentSection(CamelModel):
    """One ordered block of content on a career page."""

    id: str
    type: SectionType
    title: str = Field(..., min_length=1, max_length=100)
    content: str = Field(..., min_length=1, max_length=5000)
    images: List[str] = Field(default_factory=list)
    order: int = Field(..., ge=0)
    enabled: bool = True

    @field_validator("images")
    @classmethod
    def check_image_urls(cls, value: List[str]) -> List[str]:
        for url in value:
            if not validate_url(url):
                raise ValueError(f"Invalid image URL: {url}")
        return value


class BrandingUpsert(CamelModel):
    """Body of ``POST /api/recruiter/branding``."""

    company_name: str = Field(..., min_length=1, max_length=100)
    company_slug: str = Field(..., min_length=1, max_length=50)
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    culture_video_url: Optional[str] = None
    primary_color: str = DEFAULT_PRIMARY_COLOR
    secondary_color: str = DEFAULT_SECONDARY_COLOR
    accent_color: str = DEFAULT_ACCENT_COLOR
    sections: List[ContentSection] = Field(default_factory=list)
    is_published: Optional[bool] = None

    @field_validator("company_slug")
    @classmethod
    def check_slug(cls, value: str) -> str:
        if not validate_company_slug(value):
            raise ValueError(
                "Slug must start with a letter, contain only lowercase letters, "
                "numbers and hyphens, and end with a letter or number"
            )
        return value

    @field_validator("logo_url", "banner_url", "culture_video_url", mode="before")
    @classmethod
    def blank_url_as_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("logo_url", "banner_url", "culture_video_url")
    @classmethod
    def check_url(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not validate_url(value):
            raise ValueError("Invalid URL")
        return value

    @field_validator("primary_color", "secondary_color", "accent_color")
    @classmethod
    def check_color(cls, value: str) -> str:
        if not validate_hex_color(value):
            raise ValueError("Invalid hex color")
        return value


class PublishRequest(CamelModel):
    """Body of ``PATCH /api/recruiter/branding``."""

    id: UUID
    is_published: bool


class BrandingResponse(CamelModel):
    id: UUID
    user_id: UUID
    company_name: str
    company_slug: str
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    culture_video_url: Optional[str] = None
    primary_color: str
    secondary_color: str
    accent_color: str
    sections: List[ContentSection] = Field(default_factory=list)
    is_published: bool
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    @field_validator("sections", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return value or []


class PublishResult(CamelModel):
    id: UUID
    is_published: bool
    published_at: Optional[datetime] = None
    public_url: str


class SlugAvailability(CamelModel):
    slug: str
    available: bool


class CareerPage(BrandingResponse):
    """Public career page: a published branding with its active jobs."""

    jobs: List[JobResponse] = Field(default_factory=list)

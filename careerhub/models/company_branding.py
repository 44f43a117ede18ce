"""Company branding (career page) model."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from careerhub.db.base import Base, JSONType
from careerhub.utils.constants import (
    DEFAULT_ACCENT_COLOR,
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
)


class CompanyBranding(Base):
    """A recruiter's public career page."""

    __tablename__ = "company_brandings"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    company_name = Column(String(100), nullable=False)
    company_slug = Column(String(50), unique=True, index=True, nullable=False)

    # Media
    logo_url = Column(String(500))
    banner_url = Column(String(500))
    culture_video_url = Column(String(500))

    # Theme
    primary_color = Column(String(7), default=DEFAULT_PRIMARY_COLOR, nullable=False)
    secondary_color = Column(String(7), default=DEFAULT_SECONDARY_COLOR, nullable=False)
    accent_color = Column(String(7), default=DEFAULT_ACCENT_COLOR, nullable=False)

    # Ordered content sections: [{"id", "type", "title", "content", "images", "order", "enabled"}]
    sections = Column(JSONType, default=list)

    # Publishing
    is_published = Column(Boolean, default=False, nullable=False)
    published_at = Column(DateTime)

    # Relationships
    user = relationship("User", back_populates="brandings")
    jobs = relationship("Job", back_populates="company_branding")

    def __repr__(self):
        return f"<CompanyBranding {self.company_slug}>"

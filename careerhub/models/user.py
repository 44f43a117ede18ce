"""User model."""

from sqlalchemy import Boolean, Column, String
from sqlalchemy.orm import relationship

from careerhub.db.base import Base
from careerhub.utils.constants import UserRole


class User(Base):
    """User model for authentication."""

    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255))
    phone = Column(String(20))
    company = Column(String(100))  # Recruiter's company name at signup
    role = Column(String(20), nullable=False, default=UserRole.CANDIDATE.value)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    candidate_profile = relationship(
        "CandidateProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    brandings = relationship("CompanyBranding", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"

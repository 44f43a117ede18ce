"""Job model."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship

from careerhub.db.base import Base, JSONType
from careerhub.utils.constants import DEFAULT_SALARY_CURRENCY


class Job(Base):
    """Job posting model."""

    __tablename__ = "jobs"
    __table_args__ = (
        CheckConstraint(
            "salary_min IS NULL OR salary_max IS NULL OR salary_max >= salary_min",
            name="ck_jobs_salary_range",
        ),
    )

    company_branding_id = Column(
        Uuid(as_uuid=True), ForeignKey("company_brandings.id"), nullable=False, index=True
    )
    title = Column(String(150), nullable=False, index=True)
    location = Column(String(100), nullable=False)

    # Classification
    job_type = Column(String(20), nullable=False, index=True)  # JobType
    experience_level = Column(String(20), nullable=False, index=True)  # ExperienceLevel
    employment_type = Column(String(20), nullable=False)  # EmploymentType
    department = Column(String(100))

    description = Column(Text)

    # List fields
    technical_requirements = Column(JSONType, default=list)
    soft_skills = Column(JSONType, default=list)
    responsibilities = Column(JSONType, default=list)
    benefits = Column(JSONType, default=list)
    skills = Column(JSONType, default=list)  # technical_requirements + soft_skills, used by search

    # Compensation
    salary_min = Column(Integer)
    salary_max = Column(Integer)
    salary_currency = Column(String(3), default=DEFAULT_SALARY_CURRENCY)

    contact_email = Column(String(255))
    career_slug = Column(String(200), index=True)
    application_url = Column(String(500))

    # Status
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    posted_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    expires_at = Column(DateTime)

    # Relationships
    company_branding = relationship("CompanyBranding", back_populates="jobs")
    applications = relationship("JobApplication", back_populates="job", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Job {self.title} at {self.company_branding_id}>"

"""Job application model."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from careerhub.db.base import Base
from careerhub.utils.constants import ApplicationStatus


class JobApplication(Base):
    """A candidate's application to a job, unique per (job, candidate email)."""

    __tablename__ = "job_applications"
    __table_args__ = (
        UniqueConstraint("job_id", "candidate_email", name="uq_job_applications_job_candidate"),
    )

    job_id = Column(Uuid(as_uuid=True), ForeignKey("jobs.id"), nullable=False, index=True)

    # Candidate snapshot at apply time
    candidate_name = Column(String(255), nullable=False)
    candidate_email = Column(String(255), nullable=False, index=True)
    candidate_phone = Column(String(20))
    candidate_profile_url = Column(String(500))
    resume_url = Column(String(500))
    cover_letter = Column(Text)

    # Status tracking
    status = Column(String(20), default=ApplicationStatus.APPLIED.value, nullable=False)
    applied_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    job = relationship("Job", back_populates="applications")

    def __repr__(self):
        return f"<JobApplication {self.candidate_email} -> {self.job_id}>"

"""Candidate profile model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from careerhub.db.base import Base, JSONType


class CandidateProfile(Base):
    """Candidate profile model."""

    __tablename__ = "candidate_profiles"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), unique=True, nullable=False)
    resume = Column(String(500))  # Resume URL

    # JSON fields
    skills = Column(JSONType, default=list)  # ["Python", "React", ...]
    companies = Column(JSONType, default=list)  # Past employers
    designations = Column(JSONType, default=list)  # Role held at each past employer
    looking_for_roles = Column(JSONType, default=list)

    experience = Column(Integer)
    education = Column(Text)
    location = Column(String(255))
    available_for_work = Column(Boolean, default=True)
    is_new_to_experience = Column(Boolean, default=False)
    years_of_experience = Column(Integer)

    # Relationships
    user = relationship("User", back_populates="candidate_profile")

    def __repr__(self):
        return f"<CandidateProfile {self.user_id}>"

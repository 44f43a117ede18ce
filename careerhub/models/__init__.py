"""Database models."""

# Import all models in dependency order to ensure proper relationship initialization

# Base models (no foreign keys)
from careerhub.models.user import User

# Models with foreign keys to base models
from careerhub.models.candidate_profile import CandidateProfile
from careerhub.models.company_branding import CompanyBranding
from careerhub.models.job import Job

# Models with foreign keys to other models
from careerhub.models.application import JobApplication

# Export all models
__all__ = [
    "User",
    "CandidateProfile",
    "CompanyBranding",
    "Job",
    "JobApplication",
]

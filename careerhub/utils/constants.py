"""Closed enumerations shared by models, schemas and services."""

from enum import Enum
from typing import Dict, FrozenSet


class UserRole(str, Enum):
    """User roles."""

    RECRUITER = "RECRUITER"
    CANDIDATE = "CANDIDATE"


class JobType(str, Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    INTERNSHIP = "INTERNSHIP"
    REMOTE = "REMOTE"


class ExperienceLevel(str, Enum):
    ENTRY_LEVEL = "ENTRY_LEVEL"
    JUNIOR = "JUNIOR"
    MID_LEVEL = "MID_LEVEL"
    SENIOR = "SENIOR"
    LEAD = "LEAD"
    EXECUTIVE = "EXECUTIVE"


class EmploymentType(str, Enum):
    PERMANENT = "PERMANENT"
    TEMPORARY = "TEMPORARY"


class ApplicationStatus(str, Enum):
    """Lifecycle of a job application."""

    APPLIED = "APPLIED"
    REVIEWING = "REVIEWING"
    INTERVIEWING = "INTERVIEWING"
    OFFERED = "OFFERED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"


class SectionType(str, Enum):
    """Content section types on a career page."""

    ABOUT_US = "ABOUT_US"
    LIFE_AT_COMPANY = "LIFE_AT_COMPANY"
    VALUES = "VALUES"
    BENEFITS = "BENEFITS"
    TEAM = "TEAM"
    LOCATIONS = "LOCATIONS"
    TESTIMONIALS = "TESTIMONIALS"
    CUSTOM = "CUSTOM"


class JobSortKey(str, Enum):
    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    TITLE_ASC = "title-asc"
    TITLE_DESC = "title-desc"
    APPLICATIONS_ASC = "applications-asc"
    APPLICATIONS_DESC = "applications-desc"


class MediaType(str, Enum):
    LOGO = "logo"
    BANNER = "banner"
    IMAGE = "image"
    VIDEO = "video"


# Display labels
JOB_TYPE_LABELS: Dict[JobType, str] = {
    JobType.FULL_TIME: "Full Time",
    JobType.PART_TIME: "Part Time",
    JobType.CONTRACT: "Contract",
    JobType.INTERNSHIP: "Internship",
    JobType.REMOTE: "Remote",
}

EXPERIENCE_LEVEL_LABELS: Dict[ExperienceLevel, str] = {
    ExperienceLevel.ENTRY_LEVEL: "Entry Level",
    ExperienceLevel.JUNIOR: "Junior",
    ExperienceLevel.MID_LEVEL: "Mid Level",
    ExperienceLevel.SENIOR: "Senior",
    ExperienceLevel.LEAD: "Lead",
    ExperienceLevel.EXECUTIVE: "Executive",
}

EMPLOYMENT_TYPE_LABELS: Dict[EmploymentType, str] = {
    EmploymentType.PERMANENT: "Permanent",
    EmploymentType.TEMPORARY: "Temporary",
}

APPLICATION_STATUS_LABELS: Dict[ApplicationStatus, str] = {
    ApplicationStatus.APPLIED: "Applied",
    ApplicationStatus.REVIEWING: "Under Review",
    ApplicationStatus.INTERVIEWING: "Interviewing",
    ApplicationStatus.OFFERED: "Offer Received",
    ApplicationStatus.REJECTED: "Not Selected",
    ApplicationStatus.WITHDRAWN: "Withdrawn",
}

# Allowed status transitions; terminal states map to an empty set
APPLICATION_STATUS_TRANSITIONS: Dict[ApplicationStatus, FrozenSet[ApplicationStatus]] = {
    ApplicationStatus.APPLIED: frozenset(
        {ApplicationStatus.REVIEWING, ApplicationStatus.REJECTED, ApplicationStatus.WITHDRAWN}
    ),
    ApplicationStatus.REVIEWING: frozenset(
        {ApplicationStatus.INTERVIEWING, ApplicationStatus.REJECTED, ApplicationStatus.WITHDRAWN}
    ),
    ApplicationStatus.INTERVIEWING: frozenset(
        {ApplicationStatus.OFFERED, ApplicationStatus.REJECTED, ApplicationStatus.WITHDRAWN}
    ),
    ApplicationStatus.OFFERED: frozenset(),
    ApplicationStatus.REJECTED: frozenset(),
    ApplicationStatus.WITHDRAWN: frozenset(),
}

# Statuses that no longer count as an active application
INACTIVE_APPLICATION_STATUSES = frozenset({ApplicationStatus.REJECTED, ApplicationStatus.WITHDRAWN})

# Theme defaults for new career pages
DEFAULT_PRIMARY_COLOR = "#6366f1"
DEFAULT_SECONDARY_COLOR = "#8b5cf6"
DEFAULT_ACCENT_COLOR = "#ec4899"
DEFAULT_SALARY_CURRENCY = "USD"

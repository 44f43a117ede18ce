"""Helper utilities."""

import re
import unicodedata


def slugify(text: str, max_length: int = 200) -> str:
    """Lowercase ASCII slug with single hyphens between words."""
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_text.lower()).strip("-")
    return slug[:max_length].rstrip("-")


def job_application_url(company_slug: str, job_id) -> str:
    """Public career page link for a job."""
    return f"/careers/{company_slug}/job?jobId={job_id}"


def career_page_url(company_slug: str) -> str:
    return f"/careers/{company_slug}"


def candidate_public_profile_url(user_id) -> str:
    return f"/candidate/{user_id}/public"

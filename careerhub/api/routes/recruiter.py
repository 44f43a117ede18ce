"""
Recruiter endpoints.

Branding (career page) management, the jobs dashboard, applicant review
and media uploads.
"""

from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from careerhub.api.deps import (
    get_application_service,
    get_branding_service,
    get_current_user_optional,
    get_dashboard_service,
    get_job_service,
    require_recruiter,
)
from careerhub.core.errors import Forbidden, Unauthorized, ValidationFailed
from careerhub.models.user import User
from careerhub.schemas.application import (
    ApplicationStatusResult,
    JobApplicant,
    JobApplicantsData,
    JobInfo,
    StatusUpdate,
)
from careerhub.schemas.branding import (
    BrandingResponse,
    BrandingUpsert,
    PublishRequest,
    PublishResult,
    SlugAvailability,
)
from careerhub.schemas.common import ApiResponse
from careerhub.schemas.dashboard import (
    DashboardData,
    DashboardJob,
    DashboardStats,
    JobStatusResult,
    JobStatusToggle,
)
from careerhub.schemas.job_filters import parse_dashboard_filters
from careerhub.schemas.media import UploadRequest, UploadResult
from careerhub.services.application_service import ApplicationService
from careerhub.services.branding_service import BrandingService
from careerhub.services.dashboard_service import DashboardService
from careerhub.services.job_service import JobService
from careerhub.services.media_storage_service import store_media
from careerhub.utils.constants import UserRole
from careerhub.utils.helpers import career_page_url
from careerhub.utils.validators import validate_company_slug

router = APIRouter()


# ============================================================================
# Branding
# ============================================================================


@router.get(
    "/branding",
    response_model=ApiResponse[Union[BrandingResponse, List[BrandingResponse]]],
)
async def get_branding(
    id: Optional[UUID] = Query(None),
    slug: Optional[str] = Query(None, max_length=50),
    current_user: Optional[User] = Depends(get_current_user_optional),
    service: BrandingService = Depends(get_branding_service),
):
    """
    Fetch branding.

    - `?slug=`: a published branding, no authentication needed
    - `?id=`: one of the caller's brandings
    - no parameters: all of the caller's brandings, newest first
    """
    if slug:
        branding = await service.get_by_slug(slug.lower())
        return ApiResponse(data=BrandingResponse.model_validate(branding))

    if current_user is None:
        raise Unauthorized()
    if current_user.role != UserRole.RECRUITER.value:
        raise Forbidden("Only recruiters can manage company branding")

    if id is not None:
        branding = await service.get_owned(id, current_user)
        return ApiResponse(data=BrandingResponse.model_validate(branding))

    brandings = await service.list_for_user(current_user)
    return ApiResponse(data=[BrandingResponse.model_validate(b) for b in brandings])


@router.post("/branding", response_model=ApiResponse[BrandingResponse])
async def upsert_branding(
    data: BrandingUpsert,
    response: Response,
    current_user: User = Depends(require_recruiter),
    service: BrandingService = Depends(get_branding_service),
):
    """Create a career page, or update the caller's page with the same slug."""
    branding, created = await service.upsert(current_user, data)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return ApiResponse(data=BrandingResponse.model_validate(branding))


@router.patch("/branding", response_model=ApiResponse[PublishResult])
async def publish_branding(
    request: PublishRequest,
    current_user: User = Depends(require_recruiter),
    service: BrandingService = Depends(get_branding_service),
):
    """Publish or unpublish a career page."""
    branding = await service.set_published(request.id, request.is_published, current_user)
    return ApiResponse(
        data=PublishResult(
            id=branding.id,
            is_published=branding.is_published,
            published_at=branding.published_at,
            public_url=career_page_url(branding.company_slug),
        )
    )


@router.get("/branding/slug-availability", response_model=ApiResponse[SlugAvailability])
async def check_slug_availability(
    slug: str = Query(..., min_length=1, max_length=50),
    current_user: User = Depends(require_recruiter),
    service: BrandingService = Depends(get_branding_service),
):
    slug = slug.strip().lower()
    if not validate_company_slug(slug):
        raise ValidationFailed(
            "Invalid slug",
            {"slug": ["Use lowercase letters, numbers and hyphens, starting with a letter"]},
        )
    available = await service.is_slug_available(slug, current_user)
    return ApiResponse(data=SlugAvailability(slug=slug, available=available))


# ============================================================================
# Dashboard
# ============================================================================


@router.get("/dashboard", response_model=ApiResponse[DashboardData])
async def get_dashboard(
    request: Request,
    current_user: User = Depends(require_recruiter),
    service: DashboardService = Depends(get_dashboard_service),
):
    """
    Recruiter's jobs with application counts.

    **Filters:** `search`, `jobId`, `jobType`, `experienceLevel`, `isActive`,
    `dateFrom`, `dateTo`, `companyName` (career page slug)

    **Sorting / pagination:** same `sortBy`, `page` and `limit` as `GET /api/jobs`
    """
    filters = parse_dashboard_filters(request.query_params)
    jobs, stats, total, pagination = await service.get_dashboard(filters, current_user)

    return ApiResponse(
        data=DashboardData(
            jobs=[DashboardJob.model_validate(job) for job in jobs],
            stats=DashboardStats.model_validate(stats),
            total=total,
            page=pagination.page,
            limit=pagination.limit,
            total_pages=pagination.total_pages(total),
        )
    )


@router.post("/dashboard", response_model=ApiResponse[JobStatusResult])
async def toggle_job_status(
    request: JobStatusToggle,
    current_user: User = Depends(require_recruiter),
    service: JobService = Depends(get_job_service),
):
    """Activate or deactivate one of the caller's jobs."""
    job = await service.set_job_active(request.job_id, request.is_active, current_user)
    return ApiResponse(data=JobStatusResult(id=job.id, is_active=job.is_active))


# ============================================================================
# Applicants
# ============================================================================


@router.get("/job-applicants", response_model=ApiResponse[JobApplicantsData])
async def get_job_applicants(
    job_id: UUID = Query(..., alias="jobId"),
    current_user: User = Depends(require_recruiter),
    service: ApplicationService = Depends(get_application_service),
):
    """Applicants of one of the caller's jobs, newest first, with profile details."""
    job, applicants = await service.job_applicants(job_id, current_user)
    return ApiResponse(
        data=JobApplicantsData(
            job=JobInfo(
                id=job.id,
                title=job.title,
                company_name=job.company_branding.company_name,
                location=job.location,
            ),
            applicants=[JobApplicant.model_validate(applicant) for applicant in applicants],
        )
    )


@router.patch("/applications/{application_id}/status", response_model=ApiResponse[ApplicationStatusResult])
async def update_application_status(
    application_id: UUID,
    update: StatusUpdate,
    current_user: User = Depends(require_recruiter),
    service: ApplicationService = Depends(get_application_service),
):
    application = await service.change_status(application_id, update.status, current_user)
    return ApiResponse(data=ApplicationStatusResult.model_validate(application))


# ============================================================================
# Media
# ============================================================================


@router.post("/upload", response_model=ApiResponse[UploadResult])
async def upload_media(
    request: UploadRequest,
    current_user: User = Depends(require_recruiter),
):
    """Upload a logo, banner, image or video as a base64 data URI."""
    stored = await store_media(request.file, request.type)
    return ApiResponse(data=UploadResult(url=stored.url, public_id=stored.public_id))

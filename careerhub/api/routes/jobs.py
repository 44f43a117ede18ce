"""Job endpoints - browse, post and apply."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Request, status

from careerhub.api.deps import (
    get_application_service,
    get_current_user_optional,
    get_job_service,
    require_candidate,
    require_recruiter,
)
from careerhub.models.user import User
from careerhub.schemas.application import ApplyRequest, ApplyResult
from careerhub.schemas.common import ApiResponse
from careerhub.schemas.job import (
    JobForm,
    JobListData,
    JobListMetadata,
    JobResponse,
    JobUpdate,
    JobUpsertResult,
)
from careerhub.schemas.job_filters import parse_job_search_params
from careerhub.services.application_service import ApplicationService
from careerhub.services.job_service import JobService

router = APIRouter()


@router.get("", response_model=ApiResponse[JobListData])
async def list_jobs(
    request: Request,
    viewer: Optional[User] = Depends(get_current_user_optional),
    service: JobService = Depends(get_job_service),
):
    """
    Search active jobs.

    **Filters** (all optional, combined with AND):
    - `search`: title or description substring, or exact skill (case-insensitive)
    - `location`: substring (case-insensitive)
    - `jobType`, `experienceLevel`, `employmentType`: comma-separated enum values
    - `department`: comma-separated department names
    - `companyBrandingId`: one company; its owner also sees inactive jobs

    **Sorting:** `sortBy` = date-desc (default), date-asc, title-asc,
    title-desc, applications-asc, applications-desc

    **Pagination:** `page` (from 1), `limit` (1-100, default 20)
    """
    params = parse_job_search_params(request.query_params)

    jobs, total, pagination = await service.list_jobs(params, viewer)
    metadata = JobListMetadata(
        locations=await service.get_unique_locations(),
        departments=await service.get_unique_departments(),
        job_type_counts=await service.get_job_counts_by_type(),
    )

    return ApiResponse(
        data=JobListData(
            jobs=[JobResponse.model_validate(job) for job in jobs],
            total=total,
            page=pagination.page,
            limit=pagination.limit,
            total_pages=pagination.total_pages(total),
            metadata=metadata,
        )
    )


@router.post("", response_model=ApiResponse[JobUpsertResult], status_code=status.HTTP_201_CREATED)
async def upsert_job(
    form: JobForm,
    current_user: User = Depends(require_recruiter),
    service: JobService = Depends(get_job_service),
):
    """Create a job, or overwrite the caller's job with the same `id`."""
    job = await service.upsert_job(form, current_user)
    return ApiResponse(data=JobUpsertResult.model_validate(job))


@router.get("/{job_id}", response_model=ApiResponse[JobResponse])
async def get_job(job_id: UUID, service: JobService = Depends(get_job_service)):
    """Get job details with company summary."""
    job = await service.get_job(job_id)
    return ApiResponse(data=JobResponse.model_validate(job))


@router.put("/{job_id}", response_model=ApiResponse[JobResponse])
async def update_job(
    job_id: UUID,
    update: JobUpdate,
    current_user: User = Depends(require_recruiter),
    service: JobService = Depends(get_job_service),
):
    """Partially update a job owned by the caller."""
    job = await service.update_job(job_id, update, current_user)
    return ApiResponse(data=JobResponse.model_validate(job))


@router.post("/{job_id}/apply", response_model=ApiResponse[ApplyResult])
async def apply_to_job(
    job_id: UUID,
    request: Optional[ApplyRequest] = Body(None),
    current_user: User = Depends(require_candidate),
    service: ApplicationService = Depends(get_application_service),
):
    """Apply to an active job; a candidate can apply to each job once."""
    application, job = await service.apply(job_id, current_user, request)
    return ApiResponse(
        data=ApplyResult(
            application_id=application.id,
            job_title=job.title,
            company_name=job.company_branding.company_name,
            applied_at=application.applied_at,
            candidate_profile_url=application.candidate_profile_url,
        )
    )

"""Candidate endpoints - application tracking and profile."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from careerhub.api.deps import (
    get_application_service,
    get_candidate_service,
    require_candidate,
)
from careerhub.models.user import User
from careerhub.schemas.application import ApplicationStatusResult, CandidateApplication
from careerhub.schemas.candidate import (
    CandidateProfileResponse,
    CandidateProfileUpdate,
    CandidateStats,
)
from careerhub.schemas.common import ApiResponse
from careerhub.services.application_service import ApplicationService
from careerhub.services.candidate_service import CandidateService

router = APIRouter()


@router.get("/stats", response_model=ApiResponse[CandidateStats])
async def get_stats(
    current_user: User = Depends(require_candidate),
    service: ApplicationService = Depends(get_application_service),
):
    """Application counts for the signed-in candidate."""
    stats = await service.candidate_stats(current_user.email)
    return ApiResponse(data=CandidateStats.model_validate(stats))


@router.get("/applications", response_model=ApiResponse[List[CandidateApplication]])
async def get_applications(
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(require_candidate),
    service: ApplicationService = Depends(get_application_service),
):
    """Most recent applications of the signed-in candidate."""
    applications = await service.candidate_applications(current_user.email, limit)
    return ApiResponse(data=[CandidateApplication.model_validate(a) for a in applications])


@router.post(
    "/applications/{application_id}/withdraw",
    response_model=ApiResponse[ApplicationStatusResult],
)
async def withdraw_application(
    application_id: UUID,
    current_user: User = Depends(require_candidate),
    service: ApplicationService = Depends(get_application_service),
):
    application = await service.withdraw(application_id, current_user)
    return ApiResponse(data=ApplicationStatusResult.model_validate(application))


@router.get("/{user_id}/profile", response_model=ApiResponse[CandidateProfileResponse])
async def get_profile(user_id: UUID, service: CandidateService = Depends(get_candidate_service)):
    """Public candidate profile."""
    profile = await service.get_profile(user_id)
    return ApiResponse(data=CandidateProfileResponse.model_validate(profile))


@router.put("/{user_id}/profile", response_model=ApiResponse[CandidateProfileResponse])
async def update_profile(
    user_id: UUID,
    data: CandidateProfileUpdate,
    current_user: User = Depends(require_candidate),
    service: CandidateService = Depends(get_candidate_service),
):
    """Update the caller's own profile."""
    profile = await service.update_profile(user_id, data, current_user)
    return ApiResponse(data=CandidateProfileResponse.model_validate(profile))

"""Public career pages."""

from fastapi import APIRouter, Depends

from careerhub.api.deps import get_branding_service
from careerhub.schemas.branding import BrandingResponse, CareerPage
from careerhub.schemas.common import ApiResponse
from careerhub.schemas.job import JobResponse
from careerhub.services.branding_service import BrandingService

router = APIRouter()


@router.get("/{slug}", response_model=ApiResponse[CareerPage])
async def get_career_page(slug: str, service: BrandingService = Depends(get_branding_service)):
    """Published career page with its active jobs. Unpublished pages are not found."""
    branding, jobs = await service.get_career_page(slug.lower())
    page = CareerPage(
        **BrandingResponse.model_validate(branding).model_dump(),
        jobs=[JobResponse.model_validate(job) for job in jobs],
    )
    return ApiResponse(data=page)

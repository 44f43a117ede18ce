"""API routes."""

from fastapi import APIRouter

from careerhub.api.routes import auth, candidate, careers, jobs, recruiter

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(jobs.router, prefix="/jobs", tags=["Jobs"])
api_router.include_router(careers.router, prefix="/careers", tags=["Career Pages"])
api_router.include_router(recruiter.router, prefix="/recruiter", tags=["Recruiter"])
api_router.include_router(candidate.router, prefix="/candidate", tags=["Candidate"])

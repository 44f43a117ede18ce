import os
import tempfile

# Settings are read at import time; point them at an in-memory database first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_FORMAT"] = "console"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["SENTRY_DSN"] = ""
os.environ["MEDIA_STORAGE_TYPE"] = "local"
os.environ["MEDIA_STORAGE_DIR"] = tempfile.mkdtemp(prefix="careerhub-media-")

import uuid
from datetime import datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from careerhub import models  # noqa: F401
from careerhub.core.security import create_user_token, get_password_hash
from careerhub.db.base import Base
from careerhub.db.session import get_db, json_serializer
from careerhub.main import app
from careerhub.models.application import JobApplication
from careerhub.models.candidate_profile import CandidateProfile
from careerhub.models.company_branding import CompanyBranding
from careerhub.models.job import Job
from careerhub.models.user import User
from careerhub.utils.constants import ApplicationStatus, UserRole

PASSWORD = "Secret123!"
# Hashing is slow; every seeded user shares one hash
PASSWORD_HASH = get_password_hash(PASSWORD)


@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        json_serializer=json_serializer,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    yield factory

    await engine.dispose()


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class Factory:
    """Seeds rows through short-lived sessions that are committed immediately."""

    def __init__(self, session_factory):
        self.session_factory = session_factory

    async def _save(self, *objects):
        async with self.session_factory() as session:
            session.add_all(objects)
            await session.commit()
        return objects[0] if len(objects) == 1 else objects

    async def user(self, role=UserRole.RECRUITER, email=None, is_active=True, **kwargs):
        user = User(
            email=email or f"{uuid.uuid4().hex[:10]}@example.com",
            password_hash=PASSWORD_HASH,
            name=kwargs.pop("name", "Test User"),
            role=role.value,
            is_active=is_active,
            **kwargs,
        )
        return await self._save(user)

    async def recruiter(self, **kwargs):
        return await self.user(role=UserRole.RECRUITER, company="Acme", **kwargs)

    async def candidate(self, with_profile=True, **kwargs):
        user = await self.user(role=UserRole.CANDIDATE, **kwargs)
        if with_profile:
            await self._save(
                CandidateProfile(
                    user_id=user.id,
                    resume="https://cdn.example.com/resume.pdf",
                    skills=["Python"],
                    location="Pune",
                    available_for_work=True,
                    is_new_to_experience=False,
                    years_of_experience=3,
                    companies=["Initech"],
                    designations=["Developer"],
                    looking_for_roles=["Backend Engineer"],
                )
            )
        return user

    async def branding(self, owner, slug=None, is_published=True, **kwargs):
        branding = CompanyBranding(
            user_id=owner.id,
            company_name=kwargs.pop("company_name", "Acme Corp"),
            company_slug=slug or f"acme-{uuid.uuid4().hex[:8]}",
            is_published=is_published,
            published_at=datetime.utcnow() if is_published else None,
            sections=[],
            **kwargs,
        )
        return await self._save(branding)

    async def job(self, branding, **kwargs):
        technical = kwargs.pop("technical_requirements", ["Python", "SQL"])
        soft = kwargs.pop("soft_skills", ["Communication"])
        values = dict(
            title="Backend Engineer",
            location="Pune",
            job_type="FULL_TIME",
            experience_level="MID_LEVEL",
            employment_type="PERMANENT",
            description="Build APIs",
            responsibilities=["Ship features"],
            benefits=[],
            salary_min=50000,
            salary_max=90000,
            salary_currency="USD",
            is_active=True,
            posted_at=datetime.utcnow(),
        )
        values.update(kwargs)
        job = Job(
            company_branding_id=branding.id,
            technical_requirements=technical,
            soft_skills=soft,
            skills=[*technical, *soft],
            career_slug="backend-engineer",
            **values,
        )
        return await self._save(job)

    async def application(self, job, candidate, status=ApplicationStatus.APPLIED, applied_at=None):
        application = JobApplication(
            job_id=job.id,
            candidate_name=candidate.name,
            candidate_email=candidate.email,
            status=status.value,
            applied_at=applied_at or datetime.utcnow(),
        )
        return await self._save(application)


@pytest.fixture
def factory(session_factory):
    return Factory(session_factory)


def auth_headers(user, remember_me=False):
    return {"Authorization": f"Bearer {create_user_token(user, remember_me)}"}


def job_form(branding_id, **overrides):
    """A valid ``POST /api/jobs`` body."""
    body = {
        "companyBrandingId": str(branding_id),
        "title": "Senior Python Developer",
        "location": "Bengaluru",
        "jobType": "FULL_TIME",
        "experienceLevel": "SENIOR",
        "employmentType": "PERMANENT",
        "department": "Engineering",
        "description": "Own the job search service",
        "technicalRequirements": ["Python", "PostgreSQL"],
        "softSkills": ["Ownership"],
        "responsibilities": ["Design APIs"],
        "benefits": ["Health insurance"],
        "salaryMin": 80000,
        "salaryMax": 120000,
        "salaryCurrency": "usd",
        "contactEmail": "jobs@acme.io",
        "expiresAt": (datetime.utcnow() + timedelta(days=30)).isoformat(),
    }
    body.update(overrides)
    return body

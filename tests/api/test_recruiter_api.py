import base64
import uuid
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from careerhub.config import settings
from careerhub.utils.constants import ApplicationStatus
from conftest import auth_headers

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def branding_body(slug="acme", **overrides):
    body = {
        "companyName": "Acme Corp",
        "companySlug": slug,
        "logoUrl": "https://cdn.example.com/logo.png",
        "bannerUrl": "",
        "primaryColor": "#112233",
        "sections": [
            {
                "id": "about",
                "type": "ABOUT_US",
                "title": "About us",
                "content": "We build things.",
                "images": ["https://cdn.example.com/office.jpg"],
                "order": 0,
            }
        ],
    }
    body.update(overrides)
    return body


# ============================================================================
# Branding
# ============================================================================


@pytest.mark.asyncio
async def test_branding_create_then_update(client, factory) -> None:
    recruiter = await factory.recruiter()
    headers = auth_headers(recruiter)

    created = await client.post("/api/recruiter/branding", json=branding_body(), headers=headers)
    updated = await client.post(
        "/api/recruiter/branding", json=branding_body(companyName="Acme Inc"), headers=headers
    )

    assert created.status_code == 201
    data = created.json()["data"]
    assert data["companySlug"] == "acme"
    assert data["bannerUrl"] is None
    assert data["secondaryColor"] == "#8b5cf6"
    assert data["isPublished"] is False
    assert data["publishedAt"] is None
    assert data["sections"][0]["type"] == "ABOUT_US"
    assert data["sections"][0]["enabled"] is True

    assert updated.status_code == 200
    assert updated.json()["data"]["id"] == data["id"]
    assert updated.json()["data"]["companyName"] == "Acme Inc"


@pytest.mark.asyncio
async def test_branding_publish_via_upsert_sets_published_at(client, factory) -> None:
    recruiter = await factory.recruiter()

    response = await client.post(
        "/api/recruiter/branding", json=branding_body(isPublished=True), headers=auth_headers(recruiter)
    )

    data = response.json()["data"]
    assert data["isPublished"] is True
    assert data["publishedAt"] is not None


@pytest.mark.asyncio
async def test_branding_slug_owned_by_someone_else(client, factory) -> None:
    owner = await factory.recruiter()
    await factory.branding(owner, slug="taken")
    other = await factory.recruiter()

    response = await client.post(
        "/api/recruiter/branding", json=branding_body(slug="taken"), headers=auth_headers(other)
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"companySlug": "Acme_Corp"}, "companySlug"),
        ({"companySlug": "acme-"}, "companySlug"),
        ({"primaryColor": "blue"}, "primaryColor"),
        ({"logoUrl": "ftp://cdn.example.com/logo.png"}, "logoUrl"),
        ({"companyName": ""}, "companyName"),
    ],
)
async def test_branding_validation(client, factory, overrides, field) -> None:
    recruiter = await factory.recruiter()

    response = await client.post(
        "/api/recruiter/branding", json=branding_body(**overrides), headers=auth_headers(recruiter)
    )

    assert response.status_code == 400
    assert field in response.json()["error"]["details"]


@pytest.mark.asyncio
async def test_get_branding_variants(client, factory) -> None:
    recruiter = await factory.recruiter()
    other = await factory.recruiter()
    mine = await factory.branding(recruiter, slug="mine")
    await factory.branding(recruiter, slug="draft-page", is_published=False)
    foreign = await factory.branding(other, slug="foreign")
    headers = auth_headers(recruiter)

    listed = await client.get("/api/recruiter/branding", headers=headers)
    by_id = await client.get("/api/recruiter/branding", params={"id": str(mine.id)}, headers=headers)
    foreign_by_id = await client.get("/api/recruiter/branding", params={"id": str(foreign.id)}, headers=headers)
    public_by_slug = await client.get("/api/recruiter/branding", params={"slug": "foreign"})
    draft_by_slug = await client.get("/api/recruiter/branding", params={"slug": "draft-page"})
    anonymous_list = await client.get("/api/recruiter/branding")

    assert {b["companySlug"] for b in listed.json()["data"]} == {"mine", "draft-page"}
    assert by_id.json()["data"]["id"] == str(mine.id)
    assert foreign_by_id.status_code == 403
    assert public_by_slug.json()["data"]["id"] == str(foreign.id)
    assert draft_by_slug.status_code == 404
    assert anonymous_list.status_code == 401


@pytest.mark.asyncio
async def test_candidates_cannot_list_brandings(client, factory) -> None:
    candidate = await factory.candidate()

    response = await client.get("/api/recruiter/branding", headers=auth_headers(candidate))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_publish_and_unpublish(client, factory) -> None:
    recruiter = await factory.recruiter()
    branding = await factory.branding(recruiter, slug="initech", is_published=False)
    headers = auth_headers(recruiter)

    published = await client.patch(
        "/api/recruiter/branding", json={"id": str(branding.id), "isPublished": True}, headers=headers
    )
    unpublished = await client.patch(
        "/api/recruiter/branding", json={"id": str(branding.id), "isPublished": False}, headers=headers
    )

    assert published.status_code == 200
    data = published.json()["data"]
    assert data["isPublished"] is True
    assert data["publishedAt"] is not None
    assert data["publicUrl"] == "/careers/initech"

    assert unpublished.json()["data"]["publishedAt"] is None


@pytest.mark.asyncio
async def test_slug_availability(client, factory) -> None:
    recruiter = await factory.recruiter()
    other = await factory.recruiter()
    await factory.branding(recruiter, slug="mine")
    await factory.branding(other, slug="theirs")
    headers = auth_headers(recruiter)

    async def available(slug):
        response = await client.get(
            "/api/recruiter/branding/slug-availability", params={"slug": slug}, headers=headers
        )
        return response

    assert (await available("mine")).json()["data"] == {"slug": "mine", "available": True}
    assert (await available("theirs")).json()["data"]["available"] is False
    assert (await available("Fresh")).json()["data"] == {"slug": "fresh", "available": True}
    assert (await available("9lives")).status_code == 400


# ============================================================================
# Dashboard
# ============================================================================


@pytest.mark.asyncio
async def test_dashboard_lists_only_own_jobs(client, factory) -> None:
    recruiter = await factory.recruiter()
    other = await factory.recruiter()
    branding = await factory.branding(recruiter, slug="acme")
    live = await factory.job(branding, title="Live")
    await factory.job(branding, title="Paused", is_active=False)
    await factory.job(await factory.branding(other), title="Not mine")
    await factory.application(live, await factory.candidate())
    await factory.application(live, await factory.candidate())

    response = await client.get("/api/recruiter/dashboard", headers=auth_headers(recruiter))

    assert response.status_code == 200
    data = response.json()["data"]
    assert {job["title"] for job in data["jobs"]} == {"Live", "Paused"}
    assert data["stats"] == {
        "totalJobs": 2,
        "activeJobs": 1,
        "totalApplications": 2,
        "recentApplications": 2,
    }
    assert data["total"] == 2
    assert data["totalPages"] == 1
    live_row = next(job for job in data["jobs"] if job["title"] == "Live")
    assert live_row["applicationCount"] == 2
    assert live_row["companySlug"] == "acme"


@pytest.mark.asyncio
async def test_dashboard_huge_page_number_returns_empty_page(client, factory) -> None:
    recruiter = await factory.recruiter()
    await factory.job(await factory.branding(recruiter))

    response = await client.get(
        "/api/recruiter/dashboard",
        params={"page": "1000000000000000000"},
        headers=auth_headers(recruiter),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["jobs"] == []
    assert data["total"] == 1
    assert data["stats"]["totalJobs"] == 1


@pytest.mark.asyncio
async def test_dashboard_filters(client, factory) -> None:
    recruiter = await factory.recruiter()
    first = await factory.branding(recruiter, slug="first")
    second = await factory.branding(recruiter, slug="second")
    old = await factory.job(first, title="Old role", posted_at=datetime(2024, 1, 10, 12, 0))
    await factory.job(first, title="Paused role", is_active=False, job_type="CONTRACT")
    await factory.job(second, title="Other page role", location="Remote island")
    headers = auth_headers(recruiter)

    async def titles(params):
        response = await client.get("/api/recruiter/dashboard", params=params, headers=headers)
        assert response.status_code == 200
        return {job["title"] for job in response.json()["data"]["jobs"]}

    assert await titles({"isActive": "false"}) == {"Paused role"}
    assert await titles({"jobType": "contract"}) == {"Paused role"}
    assert await titles({"companyName": "second"}) == {"Other page role"}
    assert await titles({"search": "island"}) == {"Other page role"}
    assert await titles({"jobId": str(old.id)[:8]}) == {"Old role"}
    assert await titles({"dateFrom": "2024-01-10", "dateTo": "2024-01-10"}) == {"Old role"}


@pytest.mark.asyncio
async def test_dashboard_rejects_bad_filters(client, factory) -> None:
    recruiter = await factory.recruiter()

    response = await client.get(
        "/api/recruiter/dashboard", params={"isActive": "maybe"}, headers=auth_headers(recruiter)
    )

    assert response.status_code == 400
    assert "isActive" in response.json()["error"]["details"]


@pytest.mark.asyncio
async def test_dashboard_toggle_job_status(client, factory) -> None:
    recruiter = await factory.recruiter()
    other = await factory.recruiter()
    job = await factory.job(await factory.branding(recruiter))

    toggled = await client.post(
        "/api/recruiter/dashboard",
        json={"jobId": str(job.id), "isActive": False},
        headers=auth_headers(recruiter),
    )
    forbidden = await client.post(
        "/api/recruiter/dashboard",
        json={"jobId": str(job.id), "isActive": True},
        headers=auth_headers(other),
    )

    assert toggled.status_code == 200
    assert toggled.json()["data"] == {"id": str(job.id), "isActive": False}
    assert forbidden.status_code == 403

    public = await client.get("/api/jobs")
    assert public.json()["data"]["total"] == 0


# ============================================================================
# Applicants
# ============================================================================


@pytest.mark.asyncio
async def test_job_applicants_include_profiles(client, factory) -> None:
    recruiter = await factory.recruiter()
    job = await factory.job(await factory.branding(recruiter), title="Backend Engineer")
    with_profile = await factory.candidate(name="Asha Rao")
    without_profile = await factory.candidate(with_profile=False, name="Ben Lee")
    await factory.application(job, with_profile, applied_at=datetime.utcnow() - timedelta(hours=1))
    await factory.application(job, without_profile)

    response = await client.get(
        "/api/recruiter/job-applicants", params={"jobId": str(job.id)}, headers=auth_headers(recruiter)
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["job"]["title"] == "Backend Engineer"
    assert data["job"]["companyName"] == "Acme Corp"
    first, second = data["applicants"]
    assert first["candidateName"] == "Ben Lee"
    assert first["skills"] == []
    assert second["candidateName"] == "Asha Rao"
    assert second["skills"] == ["Python"]
    assert second["lookingForRoles"] == ["Backend Engineer"]


@pytest.mark.asyncio
async def test_job_applicants_guarding(client, factory) -> None:
    owner = await factory.recruiter()
    intruder = await factory.recruiter()
    job = await factory.job(await factory.branding(owner))

    foreign = await client.get(
        "/api/recruiter/job-applicants", params={"jobId": str(job.id)}, headers=auth_headers(intruder)
    )
    missing_param = await client.get("/api/recruiter/job-applicants", headers=auth_headers(owner))
    unknown = await client.get(
        "/api/recruiter/job-applicants", params={"jobId": str(uuid.uuid4())}, headers=auth_headers(owner)
    )

    assert foreign.status_code == 403
    assert missing_param.status_code == 400
    assert "jobId" in missing_param.json()["error"]["details"]
    assert unknown.status_code == 404


@pytest.mark.asyncio
async def test_application_status_update(client, factory) -> None:
    recruiter = await factory.recruiter()
    job = await factory.job(await factory.branding(recruiter))
    application = await factory.application(job, await factory.candidate())
    headers = auth_headers(recruiter)
    url = f"/api/recruiter/applications/{application.id}/status"

    reviewing = await client.patch(url, json={"status": "REVIEWING"}, headers=headers)
    backwards = await client.patch(url, json={"status": "APPLIED"}, headers=headers)
    unknown = await client.patch(url, json={"status": "HIRED"}, headers=headers)

    assert reviewing.status_code == 200
    assert reviewing.json()["data"]["status"] == ApplicationStatus.REVIEWING.value
    assert backwards.status_code == 400
    assert backwards.json()["error"]["message"] == "Invalid status transition"
    assert unknown.status_code == 400


# ============================================================================
# Media upload
# ============================================================================


def data_uri(mime: str, content: bytes) -> str:
    return f"data:{mime};base64,{base64.b64encode(content).decode()}"


@pytest.mark.asyncio
async def test_upload_logo_to_local_storage(client, factory, tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(settings, "MEDIA_STORAGE_DIR", str(tmp_path))
    recruiter = await factory.recruiter()

    response = await client.post(
        "/api/recruiter/upload",
        json={"file": data_uri("image/png", PNG_BYTES), "type": "logo"},
        headers=auth_headers(recruiter),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["publicId"].startswith("company-logos/")
    assert data["url"] == f"/media/{data['publicId']}.png"
    assert (Path(tmp_path) / f"{data['publicId']}.png").read_bytes() == PNG_BYTES


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"file": data_uri("video/mp4", b"frames"), "type": "logo"},
        {"file": data_uri("image/png", b"pixels"), "type": "video"},
        {"file": "data:image/png;base64,***", "type": "banner"},
        {"file": "https://cdn.example.com/logo.png", "type": "logo"},
        {"file": data_uri("image/png", b"pixels"), "type": "document"},
    ],
)
async def test_upload_rejects_bad_payloads(client, factory, body) -> None:
    recruiter = await factory.recruiter()

    response = await client.post("/api/recruiter/upload", json=body, headers=auth_headers(recruiter))

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_upload_storage_failure(client, factory, monkeypatch) -> None:
    recruiter = await factory.recruiter()

    def broken_save(content, key):
        raise OSError("disk full")

    monkeypatch.setattr("careerhub.services.media_storage_service._save_local", broken_save)

    response = await client.post(
        "/api/recruiter/upload",
        json={"file": data_uri("image/png", PNG_BYTES), "type": "banner"},
        headers=auth_headers(recruiter),
    )

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "UPLOAD_FAILED"


@pytest.mark.asyncio
async def test_upload_oversized_payload_rejected_before_decoding(client, factory, tmp_path, monkeypatch) -> None:
    recruiter = await factory.recruiter()
    monkeypatch.setattr(settings, "MEDIA_STORAGE_DIR", str(tmp_path))
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 16)

    # Not valid base64 either; the size check has to fire first
    response = await client.post(
        "/api/recruiter/upload",
        json={"file": "data:image/png;base64," + "!" * 64, "type": "logo"},
        headers=auth_headers(recruiter),
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"]["file"] == ["File exceeds 16 bytes"]

    at_limit = await client.post(
        "/api/recruiter/upload",
        json={"file": data_uri("image/png", b"x" * 16), "type": "logo"},
        headers=auth_headers(recruiter),
    )
    assert at_limit.status_code == 200

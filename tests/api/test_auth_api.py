import pytest

from careerhub.config import settings
from conftest import PASSWORD, auth_headers


def signup_body(**overrides):
    body = {
        "firstName": "Asha",
        "lastName": "Rao",
        "email": "Asha.Rao@Example.com",
        "phone": "9876543210",
        "password": "Str0ng!Pass",
        "confirmPassword": "Str0ng!Pass",
        "lookingFor": "CANDIDATE",
        "isNewToExperience": False,
        "yearsOfExperience": 4,
        "companies": [{"name": "Initech", "designation": "Developer"}],
        "lookingForRoles": ["Backend Engineer"],
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_candidate_signup_login_and_me(client) -> None:
    signup = await client.post("/api/signup", json=signup_body())

    assert signup.status_code == 201
    data = signup.json()["data"]
    assert data["email"] == "asha.rao@example.com"
    assert data["name"] == "Asha Rao"
    assert data["role"] == "CANDIDATE"
    assert data["tokenType"] == "bearer"
    assert data["expiresIn"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    assert data["profile"]["companies"] == ["Initech"]
    assert data["profile"]["designations"] == ["Developer"]
    assert data["profile"]["lookingForRoles"] == ["Backend Engineer"]

    login = await client.post(
        "/api/login", json={"emailOrUsername": "ASHA.RAO@example.com", "password": "Str0ng!Pass"}
    )
    assert login.status_code == 200
    token = login.json()["data"]["token"]

    me = await client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["data"]["email"] == "asha.rao@example.com"
    assert me.json()["data"]["role"] == "CANDIDATE"


@pytest.mark.asyncio
async def test_recruiter_signup_has_no_profile(client) -> None:
    response = await client.post(
        "/api/signup",
        json=signup_body(lookingFor="RECRUITER", company="Globex", companies=[], lookingForRoles=[]),
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["role"] == "RECRUITER"
    assert data["profile"] is None


@pytest.mark.asyncio
async def test_fresher_signup_needs_no_work_history(client) -> None:
    response = await client.post(
        "/api/signup",
        json=signup_body(isNewToExperience=True, yearsOfExperience=None, companies=[]),
    )

    assert response.status_code == 201
    assert response.json()["data"]["profile"]["isNewToExperience"] is True


@pytest.mark.asyncio
async def test_duplicate_email(client, factory) -> None:
    await factory.candidate(email="asha.rao@example.com")

    response = await client.post("/api/signup", json=signup_body())

    assert response.status_code == 409


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"confirmPassword": "Different1!"}, "confirmPassword"),
        ({"password": "password", "confirmPassword": "password"}, "password"),
        ({"lookingForRoles": []}, "lookingForRoles"),
        ({"companies": [], "yearsOfExperience": None}, "companies"),
        ({"firstName": "A1"}, "firstName"),
        ({"email": "not-an-email"}, "email"),
        ({"lookingFor": "ADMIN"}, "lookingFor"),
    ],
)
async def test_signup_validation(client, overrides, field) -> None:
    response = await client.post("/api/signup", json=signup_body(**overrides))

    assert response.status_code == 400
    assert field in response.json()["error"]["details"]


@pytest.mark.asyncio
async def test_login_failures(client, factory) -> None:
    await factory.candidate(email="known@example.com")
    await factory.candidate(email="inactive@example.com", is_active=False)

    wrong_password = await client.post(
        "/api/login", json={"emailOrUsername": "known@example.com", "password": "nope"}
    )
    unknown = await client.post(
        "/api/login", json={"emailOrUsername": "ghost@example.com", "password": PASSWORD}
    )
    inactive = await client.post(
        "/api/login", json={"emailOrUsername": "inactive@example.com", "password": PASSWORD}
    )

    assert wrong_password.status_code == 401
    assert wrong_password.json()["error"]["message"] == "Invalid email or password"
    assert unknown.status_code == 401
    assert inactive.status_code == 403


@pytest.mark.asyncio
async def test_remember_me_extends_token_lifetime(client, factory) -> None:
    await factory.recruiter(email="boss@example.com")

    response = await client.post(
        "/api/login",
        json={"emailOrUsername": "boss@example.com", "password": PASSWORD, "rememberMe": True},
    )

    assert response.status_code == 200
    assert response.json()["data"]["expiresIn"] == settings.REMEMBER_ME_EXPIRE_DAYS * 86400
    assert response.json()["data"]["profile"] is None


@pytest.mark.asyncio
async def test_me_requires_valid_token(client, factory) -> None:
    inactive = await factory.recruiter(is_active=False)

    missing = await client.get("/api/me")
    garbage = await client.get("/api/me", headers={"Authorization": "Bearer not-a-jwt"})
    deactivated = await client.get("/api/me", headers=auth_headers(inactive))

    assert missing.status_code == 401
    assert garbage.status_code == 401
    assert deactivated.status_code == 403


@pytest.mark.asyncio
async def test_health(client) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"

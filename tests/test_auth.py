"""Sign-in and route protection."""
from app.core.security import create_access_token
from app.services.user_service import UserService


LOGIN_URL = "/api/v1/auth/login"

# Seeded by the ``seed`` fixture
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


async def test_login_returns_bearer_token(client, seed):
    response = await client.post(LOGIN_URL, json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["expires_in"] == 365 * 24 * 60 * 60
    assert body["access_token"]


async def test_login_rejects_bad_credentials(client, seed):
    wrong_password = await client.post(LOGIN_URL, json={"username": ADMIN_USERNAME, "password": "nope"})
    unknown_user = await client.post(LOGIN_URL, json={"username": "ghost", "password": ADMIN_PASSWORD})
    incomplete = await client.post(LOGIN_URL, json={"username": ADMIN_USERNAME})

    assert wrong_password.status_code == 401
    assert unknown_user.status_code == 401
    assert incomplete.status_code == 400


async def test_me_returns_signed_in_user(auth_client):
    response = await auth_client.get("/api/v1/auth/me")

    assert response.status_code == 200
    body = response.json()
    assert body["username"] == ADMIN_USERNAME
    assert body["is_active"] is True
    assert "password_hash" not in body


async def test_protected_routes_need_a_valid_token(client, seed):
    assert (await client.get("/api/v1/products")).status_code == 401

    client.headers["Authorization"] = "Bearer not-a-jwt"
    assert (await client.get("/api/v1/products")).status_code == 401

    client.headers["Authorization"] = f"Bearer {create_access_token(9999)}"
    assert (await client.get("/api/v1/products")).status_code == 401


async def test_deactivated_user_is_locked_out(auth_client, session_factory):
    async with session_factory() as session:
        await UserService(session).deactivate(ADMIN_USERNAME)
        await session.commit()

    # Existing token is refused
    assert (await auth_client.get("/api/v1/auth/me")).status_code == 403

    # And a new sign-in fails
    del auth_client.headers["Authorization"]
    response = await auth_client.post(LOGIN_URL, json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert response.status_code == 401


async def test_root_and_health_are_public(client):
    root = await client.get("/")
    assert root.status_code == 200
    assert root.json()["docs"] == "/docs"

    health = await client.get("/health")
    assert health.status_code == 200
    assert health.json()["checks"]["database"] == "connected"

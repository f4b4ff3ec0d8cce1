import pytest
import pytest_asyncio
from httpx import AsyncClient

from council_admin.domain.base import utcnow
from council_admin.domain.entities import UserRole
from tests.fixtures.factories import PASSWORD


@pytest.fixture
def seed_pending(seed_user):
    async def seed(email="pending@acme.com", **overrides):
        values = dict(
            email=email,
            name="Pat Pending",
            active=False,
            approved=False,
            approved_at=None,
        )
        values.update(overrides)
        return await seed_user(**values)

    return seed


@pytest_asyncio.fixture
async def as_admin(seed_user, login):
    await seed_user(email="admin@acme.com", name="Alex Admin", role=UserRole.ADMIN)
    await login("admin@acme.com")


@pytest.mark.asyncio
async def test_list_pending_users(client: AsyncClient, seed_pending, as_admin):
    pending_id = await seed_pending()
    await seed_pending(email="unverified@acme.com", email_verified=False)

    response = await client.get("/api/users/pending")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["users"][0]["id"] == pending_id


@pytest.mark.asyncio
async def test_approve_requires_session(client: AsyncClient, seed_pending):
    pending_id = await seed_pending()

    response = await client.post(f"/api/users/{pending_id}/approve")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_editor_cannot_approve(client: AsyncClient, seed_user, seed_pending, login):
    pending_id = await seed_pending()
    await seed_user(email="editor@acme.com")
    await login("editor@acme.com")

    response = await client.post(f"/api/users/{pending_id}/approve")

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_approve_unverified_user(client: AsyncClient, seed_pending, as_admin):
    pending_id = await seed_pending(email_verified=False)

    response = await client.post(f"/api/users/{pending_id}/approve")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "EMAIL_NOT_VERIFIED"


@pytest.mark.asyncio
async def test_approve_unknown_user(client: AsyncClient, as_admin):
    response = await client.post("/api/users/00000000-0000-0000-0000-000000000000/approve")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_reject_then_approve_conflicts(
    client: AsyncClient, seed_pending, as_admin, email_sender
):
    pending_id = await seed_pending()

    response = await client.request(
        "DELETE", f"/api/users/{pending_id}/approve", json={"reason": "Unknown club"}
    )
    assert response.status_code == 200
    assert email_sender.last("rejected") == ("pending@acme.com", "Pat Pending", "Unknown club")

    response = await client.post(f"/api/users/{pending_id}/approve")
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ACCOUNT_REJECTED"


@pytest.mark.asyncio
async def test_reject_without_body(client: AsyncClient, seed_pending, as_admin):
    pending_id = await seed_pending()

    response = await client.delete(f"/api/users/{pending_id}/approve")

    assert response.status_code == 200
    assert response.json()["success"] is True


@pytest.mark.asyncio
async def test_rejected_user_session_stops_working(
    client: AsyncClient, seed_user, seed_pending, login
):
    """A live cookie of a rejected account is no longer accepted"""
    await seed_user(email="admin@acme.com", name="Alex Admin", role=UserRole.SUPER_ADMIN)
    member_id = await seed_user(email="member@acme.com")

    await login("member@acme.com")
    member_cookie = client.cookies.get("session")
    await login("admin@acme.com")
    response = await client.delete(f"/api/users/{member_id}/approve")
    assert response.status_code == 200

    client.cookies.clear()
    client.cookies.set("session", member_cookie)
    response = await client.get("/api/auth/session")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_admin_verify_email_actions(
    client: AsyncClient, seed_pending, as_admin, email_sender
):
    pending_id = await seed_pending(email_verified=False)

    resend = await client.post(f"/api/users/{pending_id}/verify-email", json={"action": "resend"})
    assert resend.status_code == 200
    assert resend.json()["email_sent"] is True
    assert email_sender.last("verification")[0] == "pending@acme.com"

    verify = await client.post(f"/api/users/{pending_id}/verify-email", json={"action": "verify"})
    assert verify.status_code == 200

    again = await client.post(f"/api/users/{pending_id}/verify-email", json={"action": "resend"})
    assert again.status_code == 400
    assert again.json()["error"]["code"] == "ALREADY_VERIFIED"


@pytest.mark.asyncio
async def test_admin_verify_email_rejects_unknown_action(
    client: AsyncClient, seed_pending, as_admin
):
    pending_id = await seed_pending()

    response = await client.post(f"/api/users/{pending_id}/verify-email", json={"action": "approve"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_rejected_user_can_register_again(client: AsyncClient, seed_pending, email_sender):
    pending_id = await seed_pending(rejected_at=utcnow(), rejection_reason="Unknown club")

    response = await client.post(
        "/api/auth/register",
        json={"name": "Pat Pending", "email": "pending@acme.com", "password": PASSWORD},
    )

    assert response.status_code == 201
    assert response.json()["user_id"] == pending_id
    assert email_sender.last("verification")[0] == "pending@acme.com"

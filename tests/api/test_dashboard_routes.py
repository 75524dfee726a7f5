"""HTTP surface of the dashboard router."""

from __future__ import annotations

from datetime import timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from core.exceptions import StoreError
from features.dashboard.dependencies import get_dashboard_gateway
from features.dashboard.gateway import DashboardGateway
from main import app
from tests.helpers import seed_activity, seed_profile


class _FailingInsertGateway(DashboardGateway):
    async def insert_activity(self, user_id, activity_type, title, description=None):
        raise StoreError("Failed to record activity", operation="insert_activity")


class _UnreachableReadsGateway(DashboardGateway):
    async def fetch_recent_activities(self, user_id, limit=10):
        raise StoreError("Database operation failed", operation="transaction")

    async def count_activities(self, user_id, activity_type):
        if activity_type == "task_completed":
            raise StoreError("Database operation failed", operation="transaction")
        return await super().count_activities(user_id, activity_type)


@pytest_asyncio.fixture
async def client(session_factory):
    app.dependency_overrides[get_dashboard_gateway] = lambda: DashboardGateway(session_factory)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def user(session_factory, auth_token_factory):
    user_id = await seed_profile(session_factory, full_name="Ada Lovelace", email="ada@example.com")
    token = auth_token_factory(user_id=user_id, email="ada@example.com")
    return {"id": user_id, "headers": {"Authorization": f"Bearer {token}"}}


@pytest.mark.asyncio
async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_dashboard_requires_bearer_token(client: AsyncClient) -> None:
    response = await client.get("/api/v1/dashboard")

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["data"] == {"reason": "token_missing"}
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_dashboard_view(client: AsyncClient, session_factory, user) -> None:
    await seed_activity(session_factory, user["id"], activity_type="task_added", age=timedelta(minutes=10))
    await seed_activity(session_factory, user["id"], activity_type="task_completed", age=timedelta(minutes=2))

    response = await client.get("/api/v1/dashboard", headers=user["headers"])

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["greeting_name"] == "Ada Lovelace"
    assert data["stats"] == {"active": 1, "completed": 1}
    assert [item["icon"] for item in data["activities"]] == ["check", "plus-circle"]
    assert data["activities"][0]["age_label"] == "2 minutes ago"
    assert data["empty_message"] is None
    assert data["loading"] is False


@pytest.mark.asyncio
async def test_dashboard_without_profile_uses_fallbacks(client: AsyncClient, auth_token: str) -> None:
    response = await client.get("/api/v1/dashboard", headers={"Authorization": f"Bearer {auth_token}"})

    data = response.json()["data"]
    assert data["greeting_name"] == "there"
    assert data["email"] == "user@example.com"
    assert data["activities"] == []
    assert data["empty_message"] == "No activities yet. Click the + button to get started!"


@pytest.mark.asyncio
async def test_list_activities_honours_limit(client: AsyncClient, session_factory, user) -> None:
    for minutes in (1, 2, 3):
        await seed_activity(session_factory, user["id"], title=f"t{minutes}", age=timedelta(minutes=minutes))

    response = await client.get("/api/v1/dashboard/activities?limit=2", headers=user["headers"])

    body = response.json()
    assert [item["title"] for item in body["data"]["activities"]] == ["t1", "t2"]
    assert body["meta"] == {"limit": 2, "count": 2}


@pytest.mark.asyncio
@pytest.mark.parametrize("limit", [0, 51])
async def test_list_activities_rejects_out_of_range_limit(client: AsyncClient, user, limit: int) -> None:
    response = await client.get(f"/api/v1/dashboard/activities?limit={limit}", headers=user["headers"])

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["data"]["errors"][0]["loc"] == ["query", "limit"]


@pytest.mark.asyncio
async def test_stats(client: AsyncClient, session_factory, user) -> None:
    await seed_activity(session_factory, user["id"], activity_type="task_added")
    await seed_activity(session_factory, user["id"], activity_type="task_added")
    await seed_activity(session_factory, user["id"], activity_type="note")

    response = await client.get("/api/v1/dashboard/stats", headers=user["headers"])

    assert response.json()["data"] == {"active": 2, "completed": 0}


@pytest.mark.asyncio
async def test_quick_add_records_default_activity_and_refetches(client: AsyncClient, session_factory, user) -> None:
    await seed_activity(session_factory, user["id"], title="older", age=timedelta(hours=1))

    response = await client.post("/api/v1/dashboard/activities", json={}, headers=user["headers"])

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["activities"][0]["title"] == "New task created"
    assert data["activities"][0]["kind"] == "task_added"
    assert data["activities"][0]["age_label"] == "Just now"
    assert data["stats"]["active"] == 2
    assert data["last_error"] is None


@pytest.mark.asyncio
async def test_failed_insert_returns_502_with_unchanged_view(client: AsyncClient, session_factory, user) -> None:
    await seed_activity(session_factory, user["id"], title="existing")
    app.dependency_overrides[get_dashboard_gateway] = lambda: _FailingInsertGateway(session_factory)

    response = await client.post(
        "/api/v1/dashboard/activities",
        json={"activity_type": "task_completed", "title": "Done"},
        headers=user["headers"],
    )

    assert response.status_code == 502
    body = response.json()
    assert body["success"] is False
    assert body["data"]["operation"] == "insert_activity"
    dashboard = body["data"]["dashboard"]
    assert [item["title"] for item in dashboard["activities"]] == ["existing"]
    assert dashboard["last_error"] == "Failed to record activity"


@pytest.mark.asyncio
async def test_update_profile_name(client: AsyncClient, user) -> None:
    response = await client.patch(
        "/api/v1/dashboard/profile", json={"full_name": "  Countess Ada  "}, headers=user["headers"]
    )

    assert response.status_code == 200
    assert response.json()["data"]["full_name"] == "Countess Ada"

    view = await client.get("/api/v1/dashboard", headers=user["headers"])
    assert view.json()["data"]["greeting_name"] == "Countess Ada"


@pytest.mark.asyncio
async def test_update_profile_missing_row(client: AsyncClient, auth_token: str) -> None:
    response = await client.patch(
        "/api/v1/dashboard/profile",
        json={"full_name": "Nobody"},
        headers={"Authorization": f"Bearer {auth_token}"},
    )

    assert response.status_code == 404
    assert response.json()["data"] == {"resource": "profile"}


@pytest.mark.asyncio
async def test_update_profile_rejects_blank_name(client: AsyncClient, user) -> None:
    response = await client.patch("/api/v1/dashboard/profile", json={"full_name": "   "}, headers=user["headers"])

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_missing_store_configuration_returns_envelope(client: AsyncClient, user) -> None:
    from core.exceptions import ConfigurationError

    def _unconfigured():
        raise ConfigurationError("DASHBOARD_DB_URL must be configured", key="DASHBOARD_DB_URL")

    app.dependency_overrides[get_dashboard_gateway] = _unconfigured

    response = await client.get("/api/v1/dashboard/stats", headers=user["headers"])

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["data"]["context"] == {"key": "DASHBOARD_DB_URL"}


@pytest.mark.asyncio
async def test_unreachable_store_serves_empty_feed(client: AsyncClient, session_factory, user) -> None:
    app.dependency_overrides[get_dashboard_gateway] = lambda: _UnreachableReadsGateway(session_factory)

    response = await client.get("/api/v1/dashboard/activities", headers=user["headers"])

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"] == {"activities": []}
    assert body["meta"]["degraded"] is True
    assert body["meta"]["count"] == 0


@pytest.mark.asyncio
async def test_failed_counter_reads_as_zero(client: AsyncClient, session_factory, user) -> None:
    await seed_activity(session_factory, user["id"], activity_type="task_added")
    await seed_activity(session_factory, user["id"], activity_type="task_completed")
    app.dependency_overrides[get_dashboard_gateway] = lambda: _UnreachableReadsGateway(session_factory)

    response = await client.get("/api/v1/dashboard/stats", headers=user["headers"])

    assert response.status_code == 200
    body = response.json()
    assert body["data"] == {"active": 1, "completed": 0}
    assert body["meta"] == {"degraded": True}


@pytest.mark.asyncio
async def test_stats_without_failures_carry_no_meta(client: AsyncClient, user) -> None:
    response = await client.get("/api/v1/dashboard/stats", headers=user["headers"])

    assert response.json()["meta"] is None

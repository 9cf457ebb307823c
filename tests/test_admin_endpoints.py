"""Tests for admin endpoints."""

from fastapi.testclient import TestClient

from calorie_tracker.api.app import create_app
from tests.conftest import auth_headers, make_user


def test_admin_routes_reject_regular_users(container) -> None:
    client = TestClient(create_app(container))
    headers = auth_headers(container, make_user())

    response = client.get("/api/admin/users", headers=headers)

    assert response.status_code == 403
    assert response.json()["detail"] == "Admin access only"


def test_admin_users_endpoint(container) -> None:
    client = TestClient(create_app(container))
    headers = auth_headers(container, make_user(role="admin"))
    container.user_service.repository.create_user(make_user(email="a@example.com"))

    response = client.get(
        "/api/admin/users", headers=headers, params={"role": "user"}
    )

    assert response.status_code == 200
    data = response.json()
    assert [user["email"] for user in data["users"]] == ["a@example.com"]
    assert data["stats"]["roles"] == {"admin": 1, "user": 1}


def test_admin_user_detail_and_update(container) -> None:
    client = TestClient(create_app(container))
    headers = auth_headers(container, make_user(role="admin"))
    user = container.user_service.repository.create_user(make_user())

    detail = client.get(f"/api/admin/users/{user.id}", headers=headers)
    updated = client.put(
        f"/api/admin/users/{user.id}",
        headers=headers,
        json={"name": "Renamed", "profile": {"weight": 82}},
    )

    assert detail.json()["activity"]["total_meals"] == 0
    assert updated.json()["name"] == "Renamed"
    assert updated.json()["profile"]["weight"] == 82


def test_admin_delete_self_rejected(container) -> None:
    client = TestClient(create_app(container))
    admin = make_user(role="admin")
    headers = auth_headers(container, admin)

    response = client.delete(f"/api/admin/users/{admin.id}", headers=headers)

    assert response.status_code == 400


def test_admin_dashboard_and_purge(container) -> None:
    client = TestClient(create_app(container))
    admin = make_user(role="admin", email="boss@example.com")
    headers = auth_headers(container, admin)
    container.user_service.repository.create_user(make_user())

    dashboard = client.get("/api/admin/dashboard-stats", headers=headers)
    purge = client.post("/api/admin/purge-non-admins", headers=headers)

    assert dashboard.json()["totals"]["users"] == 2
    assert purge.json()["users"] == 1
    assert purge.json()["kept_admins"] == ["boss@example.com"]

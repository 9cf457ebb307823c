"""Tests for activity endpoints."""

from dataclasses import replace

from fastapi.testclient import TestClient

from calorie_tracker.api.app import create_app
from tests.conftest import auth_headers, make_user


def test_predefined_activities(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/api/activities/predefined")

    assert response.status_code == 200
    assert {"name", "name_ar", "type", "met_value", "intensity"} <= set(
        response.json()[0]
    )


def test_activity_lifecycle(container) -> None:
    client = TestClient(create_app(container))
    user = make_user()
    headers = auth_headers(container, user)

    created = client.post(
        "/api/activities",
        headers=headers,
        json={"name": "Running", "type": "cardio", "duration": 30, "met_value": 10},
    )
    activity_id = created.json()["id"]
    updated = client.put(
        f"/api/activities/{activity_id}", headers=headers, json={"duration": 60}
    )
    container.user_service.repository.update_user(
        replace(user, profile=replace(user.profile, weight=80))
    )
    recalculated = client.post(
        f"/api/activities/{activity_id}/recalculate", headers=headers
    )
    deleted = client.delete(f"/api/activities/{activity_id}", headers=headers)
    missing = client.get(f"/api/activities/{activity_id}", headers=headers)

    assert created.status_code == 201
    assert created.json()["calories_burned"] == 350
    assert updated.json()["calories_burned"] == 700
    assert recalculated.json()["calories_burned"] == 800
    assert deleted.status_code == 200
    assert missing.status_code == 404


def test_create_activity_without_weight(container) -> None:
    client = TestClient(create_app(container))
    user = make_user()
    headers = auth_headers(
        container, replace(user, profile=replace(user.profile, weight=None))
    )

    estimated = client.post(
        "/api/activities", headers=headers, json={"name": "Yoga", "type": "other"}
    )
    supplied = client.post(
        "/api/activities",
        headers=headers,
        json={"name": "Yoga", "type": "other", "calories_burned": 120},
    )

    assert estimated.status_code == 400
    assert "weight" in estimated.json()["detail"]
    assert supplied.status_code == 201
    assert supplied.json()["calories_burned"] == 120


def test_activity_validation(container) -> None:
    client = TestClient(create_app(container))
    headers = auth_headers(container, make_user())

    response = client.post(
        "/api/activities",
        headers=headers,
        json={"name": "Run", "type": "cardio", "met_value": 30},
    )

    assert response.status_code == 422


def test_list_with_daily_totals_and_summary(container) -> None:
    client = TestClient(create_app(container))
    headers = auth_headers(container, make_user())
    for moment in ("2024-03-01T07:00:00Z", "2024-03-01T18:00:00Z"):
        client.post(
            "/api/activities",
            headers=headers,
            json={
                "name": "Walk",
                "type": "cardio",
                "duration": 30,
                "date": moment,
            },
        )

    listing = client.get(
        "/api/activities", headers=headers, params={"date": "2024-03-01"}
    )
    summary = client.get(
        "/api/activities/stats/summary",
        headers=headers,
        params={"start_date": "2024-03-01", "end_date": "2024-03-07"},
    )

    assert listing.json()["pagination"]["total"] == 2
    assert listing.json()["daily_totals"]["total_duration"] == 60
    assert summary.json()["totals"]["activity_count"] == 2
    assert summary.json()["daily_breakdown"][0]["day"] == "2024-03-01"

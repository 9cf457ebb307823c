"""Tests for food and meal endpoints."""

from uuid import uuid4

from fastapi.testclient import TestClient

from calorie_tracker.api.app import create_app
from tests.conftest import auth_headers, make_food, make_user


def test_list_foods_anonymous_and_search(container) -> None:
    client = TestClient(create_app(container))
    repository = container.food_service.repository
    repository.create_food(make_food(name="Apple"))
    repository.create_food(make_food(name="Banana"))
    repository.create_food(
        make_food(name="Private", created_by=uuid4(), is_public=False)
    )

    everything = client.get("/api/foods")
    search = client.get("/api/foods", params={"search": "ban"})

    assert everything.status_code == 200
    assert [food["name"] for food in everything.json()["foods"]] == ["Apple", "Banana"]
    assert everything.json()["pagination"]["total"] == 2
    assert [food["name"] for food in search.json()["foods"]] == ["Banana"]


def test_food_detail_includes_per_serving_nutrition(container) -> None:
    client = TestClient(create_app(container))
    food = container.food_service.repository.create_food(make_food())

    response = client.get(f"/api/foods/{food.id}")

    assert response.status_code == 200
    assert response.json()["nutrition_per_serving"]["calories"] == 52


def test_food_categories(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/api/foods/categories")

    assert response.status_code == 200
    assert response.json()[0] == {
        "value": "fruits",
        "label": "Fruits",
        "label_ar": "فواكه",
    }


def test_create_food_admin_only_with_flat_nutrition(container) -> None:
    client = TestClient(create_app(container))
    payload = {
        "name": "Oats",
        "category": "grains",
        "calories": 389,
        "protein": 16.9,
        "carbs": 66,
        "fat": 6.9,
    }

    denied = client.post(
        "/api/foods", headers=auth_headers(container, make_user()), json=payload
    )
    created = client.post(
        "/api/foods",
        headers=auth_headers(container, make_user(role="admin")),
        json=payload,
    )

    assert denied.status_code == 403
    assert created.status_code == 201
    assert created.json()["nutrition"]["calories"] == 389
    assert created.json()["is_verified"] is True


def test_create_food_requires_nutrition(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/foods",
        headers=auth_headers(container, make_user(role="admin")),
        json={"name": "Air", "category": "other"},
    )

    assert response.status_code == 422


def test_update_and_delete_food(container) -> None:
    client = TestClient(create_app(container))
    admin = make_user(role="admin")
    headers = auth_headers(container, admin)
    food = container.food_service.repository.create_food(
        make_food(created_by=admin.id)
    )

    updated = client.put(
        f"/api/foods/{food.id}", headers=headers, json={"name": "Green apple"}
    )
    deleted = client.delete(f"/api/foods/{food.id}", headers=headers)
    missing = client.get(f"/api/foods/{food.id}")

    assert updated.json()["name"] == "Green apple"
    assert deleted.status_code == 200
    assert missing.status_code == 404


def test_meal_lifecycle(container) -> None:
    client = TestClient(create_app(container))
    headers = auth_headers(container, make_user())
    apple = container.food_service.repository.create_food(make_food())

    created = client.post(
        "/api/meals",
        headers=headers,
        json={
            "date": "2024-03-01T12:00:00Z",
            "meal_type": "lunch",
            "items": [{"food_id": str(apple.id), "amount": 150}],
        },
    )
    meal_id = created.json()["id"]
    updated = client.put(
        f"/api/meals/{meal_id}",
        headers=headers,
        json={"items": [{"food_id": str(apple.id), "amount": 200}]},
    )
    fetched = client.get(f"/api/meals/{meal_id}", headers=headers)
    deleted = client.delete(f"/api/meals/{meal_id}", headers=headers)

    assert created.status_code == 201
    assert created.json()["totals"]["calories"] == 78
    assert created.json()["items"][0]["name"] == "Apple"
    assert updated.json()["totals"]["calories"] == 104
    assert fetched.json()["totals"]["calories"] == 104
    assert deleted.status_code == 200


def test_create_meal_validation_and_missing_food(container) -> None:
    client = TestClient(create_app(container))
    headers = auth_headers(container, make_user())

    empty = client.post(
        "/api/meals", headers=headers, json={"meal_type": "lunch", "items": []}
    )
    missing = client.post(
        "/api/meals",
        headers=headers,
        json={"meal_type": "lunch", "items": [{"food_id": str(uuid4()), "amount": 5}]},
    )

    assert empty.status_code == 422
    assert missing.status_code == 400


def test_other_users_meal_is_forbidden(container) -> None:
    client = TestClient(create_app(container))
    apple = container.food_service.repository.create_food(make_food())
    owner = auth_headers(container, make_user())
    stranger = auth_headers(container, make_user())
    created = client.post(
        "/api/meals/quick-add",
        headers=owner,
        json={"food_id": str(apple.id), "amount": 100, "meal_type": "snack"},
    )

    response = client.get(f"/api/meals/{created.json()['id']}", headers=stranger)

    assert created.status_code == 201
    assert response.status_code == 403


def test_daily_summary_and_stats(container) -> None:
    client = TestClient(create_app(container))
    headers = auth_headers(container, make_user())
    apple = container.food_service.repository.create_food(make_food())
    for moment, meal_type in (
        ("2024-03-01T08:00:00Z", "breakfast"),
        ("2024-03-01T13:00:00Z", "lunch"),
        ("2024-03-03T13:00:00Z", "lunch"),
    ):
        client.post(
            "/api/meals",
            headers=headers,
            json={
                "date": moment,
                "meal_type": meal_type,
                "items": [{"food_id": str(apple.id), "amount": 100}],
            },
        )

    daily = client.get("/api/meals/daily/2024-03-01", headers=headers)
    listing = client.get(
        "/api/meals", headers=headers, params={"date": "2024-03-01", "limit": 1}
    )
    stats = client.get(
        "/api/meals/stats",
        headers=headers,
        params={"start_date": "2024-03-01", "end_date": "2024-03-07"},
    )
    no_range = client.get("/api/meals/stats", headers=headers)

    assert daily.json()["total_meals"] == 2
    assert daily.json()["daily_totals"]["totals"]["calories"] == 104
    assert set(daily.json()["meals_by_type"]) == {"breakfast", "lunch"}
    assert listing.json()["pagination"] == {
        "page": 1,
        "limit": 1,
        "total": 2,
        "pages": 2,
    }
    assert stats.json()["days_with_data"] == 2
    assert stats.json()["avg_calories_per_day"] == 78
    assert stats.json()["most_logged_foods"] == {"Apple": 3}
    assert no_range.status_code == 400

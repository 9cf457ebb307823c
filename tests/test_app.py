"""Tests for the application factory."""

from fastapi.testclient import TestClient

from calorie_tracker.api.app import create_app, error_status
from calorie_tracker.domain.errors import (
    AccessDeniedError,
    CalorieTrackerError,
    InvalidFoodDataError,
    MissingProfileDataError,
    NotFoundError,
)
from calorie_tracker.services.bootstrap import SEED_MARKER


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_error_status_mapping() -> None:
    assert error_status(InvalidFoodDataError("broken")) == 500
    assert error_status(MissingProfileDataError("weight")) == 400
    assert error_status(NotFoundError("Meal")) == 404
    assert error_status(AccessDeniedError("no")) == 403
    assert error_status(CalorieTrackerError("unknown")) == 500


def test_startup_runs_bootstrap(container, marker_repository) -> None:
    app = create_app(container)

    with TestClient(app) as client:
        client.get("/health")

    assert SEED_MARKER in marker_repository.markers
    admin = container.user_service.repository.get_by_email("admin@example.com")
    assert admin is not None
    assert admin.is_admin


def test_startup_survives_bootstrap_failure(container) -> None:
    def explode() -> bool:
        raise RuntimeError("database unavailable")

    container.bootstrap_service.run = explode  # type: ignore[method-assign]

    with TestClient(create_app(container)) as client:
        response = client.get("/health")

    assert response.status_code == 200

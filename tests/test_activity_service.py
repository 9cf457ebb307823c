"""Tests for activity service."""

import logging
from datetime import UTC, date, datetime

import pytest

from calorie_tracker.domain.errors import (
    AccessDeniedError,
    MissingProfileDataError,
    NotFoundError,
)
from calorie_tracker.services.activities import ActivityService
from tests.conftest import InMemoryActivityRepository, make_user, with_weight


def _service() -> tuple[ActivityService, InMemoryActivityRepository]:
    repository = InMemoryActivityRepository()
    return ActivityService(repository=repository), repository


def test_create_activity_estimates_calories() -> None:
    service, repository = _service()
    user = make_user()

    activity = service.create_activity(
        user, {"name": "Running", "type": "cardio", "duration": 30, "met_value": 10}
    )

    assert activity.calories_burned == 350
    assert activity.intensity == "moderate"
    assert repository.activities[activity.id] == activity


def test_create_activity_uses_defaults() -> None:
    service, _ = _service()

    activity = service.create_activity(
        make_user(), {"name": "Gardening", "type": "daily"}
    )

    assert activity.duration == 60
    assert activity.met_value == 5.0
    assert activity.calories_burned == 350


def test_supplied_calories_bypass_estimate() -> None:
    service, _ = _service()
    user = with_weight(make_user(), None)

    activity = service.create_activity(
        user,
        {"name": "Watch workout", "type": "cardio", "calories_burned": 512},
    )

    assert activity.calories_burned == 512


def test_create_activity_requires_weight_for_estimate() -> None:
    service, _ = _service()

    with pytest.raises(MissingProfileDataError):
        service.create_activity(
            with_weight(make_user(), None), {"name": "Yoga", "type": "other"}
        )


def test_update_duration_recalculates_calories() -> None:
    service, _ = _service()
    user = make_user()
    activity = service.create_activity(
        user, {"name": "Cycling", "type": "cardio", "duration": 60, "met_value": 8}
    )

    updated = service.update_activity(activity.id, user, {"duration": 30})

    assert activity.calories_burned == 560
    assert updated.calories_burned == 280


def test_update_without_weight_keeps_calories_and_logs(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(logging.getLogger("calorie_tracker"), "propagate", True)
    service, _ = _service()
    user = make_user()
    activity = service.create_activity(
        user, {"name": "Cycling", "type": "cardio", "duration": 60, "met_value": 8}
    )

    with caplog.at_level(logging.INFO, logger="calorie_tracker.services.activities"):
        updated = service.update_activity(
            activity.id, with_weight(user, None), {"duration": 30}
        )

    assert updated.duration == 30
    assert updated.calories_burned == 560
    assert "keeping 560 calories" in caplog.text


def test_update_with_supplied_calories_wins() -> None:
    service, _ = _service()
    user = make_user()
    activity = service.create_activity(user, {"name": "Swim", "type": "cardio"})

    updated = service.update_activity(
        activity.id, user, {"duration": 90, "calories_burned": 100}
    )

    assert updated.duration == 90
    assert updated.calories_burned == 100


def test_recalculate_uses_current_weight() -> None:
    service, _ = _service()
    user = make_user()
    activity = service.create_activity(user, {"name": "Walk", "type": "cardio"})

    heavier = with_weight(user, 80)
    recalculated = service.recalculate(activity.id, heavier)

    assert activity.calories_burned == 350
    assert recalculated.calories_burned == 400


def test_recalculate_without_weight_fails() -> None:
    service, _ = _service()
    user = make_user()
    activity = service.create_activity(user, {"name": "Walk", "type": "cardio"})

    with pytest.raises(MissingProfileDataError):
        service.recalculate(activity.id, with_weight(user, None))


def test_activity_access_is_owner_only() -> None:
    service, _ = _service()
    activity = service.create_activity(make_user(), {"name": "Walk", "type": "cardio"})

    with pytest.raises(AccessDeniedError):
        service.get_activity(activity.id, make_user())


def test_delete_activity() -> None:
    service, repository = _service()
    user = make_user()
    activity = service.create_activity(user, {"name": "Walk", "type": "cardio"})

    service.delete_activity(activity.id, user)

    assert activity.id not in repository.activities
    with pytest.raises(NotFoundError):
        service.get_activity(activity.id, user)


def test_list_and_daily_totals() -> None:
    service, _ = _service()
    user = make_user()
    for moment, kind in (
        (datetime(2024, 3, 1, 7, tzinfo=UTC), "cardio"),
        (datetime(2024, 3, 1, 18, tzinfo=UTC), "strength"),
        (datetime(2024, 3, 2, 7, tzinfo=UTC), "cardio"),
    ):
        service.create_activity(
            user, {"name": kind, "type": kind, "duration": 30, "date": moment}
        )

    page = service.list_activities(user, day=date(2024, 3, 1))
    cardio = service.list_activities(user, activity_type="cardio")
    totals = service.daily_totals(user, date(2024, 3, 1))

    assert page.total == 2
    assert cardio.total == 2
    assert totals.activity_count == 2
    assert totals.total_duration == 60
    assert set(totals.type_breakdown) == {"cardio", "strength"}


def test_summary_over_explicit_range() -> None:
    service, _ = _service()
    user = make_user()
    service.create_activity(
        user,
        {
            "name": "Run",
            "type": "cardio",
            "calories_burned": 300,
            "date": datetime(2024, 3, 2, 7, tzinfo=UTC),
        },
    )

    summary = service.summary(
        user, start_day=date(2024, 3, 1), end_day=date(2024, 3, 7)
    )

    assert summary.totals.total_calories_burned == 300
    assert summary.daily_breakdown[0].day == "2024-03-02"


def test_predefined_activities() -> None:
    service, _ = _service()

    templates = service.predefined()

    assert templates
    assert all(1 <= template.met_value <= 25 for template in templates)

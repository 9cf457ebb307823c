"""Activity logging service."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

from calorie_tracker.domain.activities import (
    DEFAULT_DURATION_MINUTES,
    DEFAULT_MET_VALUE,
    PREDEFINED_ACTIVITIES,
    Activity,
    ActivityTemplate,
)
from calorie_tracker.domain.errors import (
    AccessDeniedError,
    MissingProfileDataError,
    NotFoundError,
)
from calorie_tracker.domain.models import UserRecord
from calorie_tracker.domain.pagination import Page, paginate
from calorie_tracker.domain.stats import ActivitySummary, ActivityTotals
from calorie_tracker.services.energy import calories_burned, recalculate_calories
from calorie_tracker.services.stats import (
    activity_summary,
    activity_totals,
    as_utc,
    date_range_window,
    day_window,
    trailing_window,
)

_logger = logging.getLogger(__name__)

DEFAULT_SUMMARY_DAYS = 7


class ActivityRepository(Protocol):
    """Persistence interface for activities."""

    def get_activity(self, activity_id: UUID) -> Activity | None:
        """Return an activity by id."""

    def list_activities(
        self,
        user_id: UUID | None,
        start: datetime | None = None,
        end: datetime | None = None,
        activity_type: str | None = None,
    ) -> list[Activity]:
        """Return activities in [start, end), newest first."""

    def create_activity(self, activity: Activity) -> Activity:
        """Persist a new activity."""

    def update_activity(self, activity: Activity) -> Activity:
        """Persist changes to an activity."""

    def delete_activity(self, activity_id: UUID) -> None:
        """Delete an activity."""

    def delete_activities_by_user(self, user_id: UUID) -> int:
        """Delete a user's activities and return how many were removed."""


@dataclass
class ActivityService:
    """Service for logging activities and estimating calories burned."""

    repository: ActivityRepository
    timezone: str = "UTC"

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def predefined(self) -> tuple[ActivityTemplate, ...]:
        return PREDEFINED_ACTIVITIES

    def create_activity(self, user: UserRecord, fields: dict[str, object]) -> Activity:
        """Log an activity, estimating calories unless they were supplied."""
        values = dict(fields)
        duration = int(values.pop("duration", None) or DEFAULT_DURATION_MINUTES)
        met_value = float(values.pop("met_value", None) or DEFAULT_MET_VALUE)
        supplied = values.pop("calories_burned", None)
        activity_date = values.pop("date", None)
        if supplied is None:
            burned = calories_burned(met_value, _require_weight(user), duration)
        else:
            burned = int(supplied)
        activity = Activity(
            id=uuid4(),
            user_id=user.id,
            name=str(values.pop("name")),
            type=str(values.pop("type")),
            duration=duration,
            intensity=str(values.pop("intensity", None) or "moderate"),
            met_value=met_value,
            calories_burned=burned,
            date=as_utc(activity_date)
            if isinstance(activity_date, datetime)
            else datetime.now(tz=UTC),
            created_at=datetime.now(tz=UTC),
            **values,
        )
        created = self.repository.create_activity(activity)
        _logger.info(
            "Activity logged: user=%s activity=%s calories=%s",
            user.id,
            created.id,
            created.calories_burned,
        )
        return created

    def update_activity(
        self, activity_id: UUID, user: UserRecord, changes: dict[str, object]
    ) -> Activity:
        """Apply changes; MET or duration changes re-estimate calories."""
        activity = self.get_activity(activity_id, user)
        updates = {
            name: value for name, value in changes.items() if name != "calories_burned"
        }
        if isinstance(updates.get("date"), datetime):
            updates["date"] = as_utc(updates["date"])
        updated = replace(activity, **updates)
        supplied = changes.get("calories_burned")
        if supplied is not None:
            updated = replace(updated, calories_burned=int(supplied))
        elif "duration" in changes or "met_value" in changes:
            if user.profile.weight:
                updated = replace(
                    updated,
                    calories_burned=recalculate_calories(
                        updated, user.profile.weight
                    ),
                )
            else:
                _logger.info(
                    "Activity %s changed without a profile weight; "
                    "keeping %s calories",
                    activity.id,
                    updated.calories_burned,
                )
        return self.repository.update_activity(updated)

    def recalculate(self, activity_id: UUID, user: UserRecord) -> Activity:
        """Re-estimate calories from the user's current weight."""
        activity = self.get_activity(activity_id, user)
        burned = recalculate_calories(activity, _require_weight(user))
        return self.repository.update_activity(
            replace(activity, calories_burned=burned)
        )

    def get_activity(self, activity_id: UUID, user: UserRecord) -> Activity:
        activity = self.repository.get_activity(activity_id)
        if activity is None:
            raise NotFoundError("Activity", activity_id)
        if activity.user_id != user.id:
            raise AccessDeniedError("Access denied to this activity")
        return activity

    def delete_activity(self, activity_id: UUID, user: UserRecord) -> None:
        activity = self.get_activity(activity_id, user)
        self.repository.delete_activity(activity.id)

    def list_activities(  # noqa: PLR0913
        self,
        user: UserRecord,
        day: date | None = None,
        activity_type: str | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> Page[Activity]:
        start, end = day_window(day, self.tz) if day else (None, None)
        activities = self.repository.list_activities(
            user.id, start, end, activity_type
        )
        return paginate(activities, page, limit)

    def daily_totals(self, user: UserRecord, day: date) -> ActivityTotals:
        """Return calories, duration and per-type totals for a day."""
        start, end = day_window(day, self.tz)
        return activity_totals(self.repository.list_activities(user.id, start, end))

    def summary(
        self,
        user: UserRecord,
        days: int | None = None,
        start_day: date | None = None,
        end_day: date | None = None,
    ) -> ActivitySummary:
        """Summarize activities for explicit dates or the last N days."""
        if start_day is not None and end_day is not None:
            start, end = date_range_window(start_day, end_day, self.tz)
        else:
            start, end = trailing_window(days or DEFAULT_SUMMARY_DAYS, self.tz)
        activities = self.repository.list_activities(user.id, start, end)
        return activity_summary(activities, start, end, self.tz)


def _require_weight(user: UserRecord) -> float:
    if not user.profile.weight:
        raise MissingProfileDataError(
            "User weight is required to calculate calories burned"
        )
    return user.profile.weight

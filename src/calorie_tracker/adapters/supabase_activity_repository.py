"""Supabase repository for activities."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_rows import format_datetime, parse_datetime
from calorie_tracker.domain.activities import Activity
from calorie_tracker.services.activities import ActivityRepository


@dataclass
class SupabaseActivityRepository(ActivityRepository):
    """Supabase implementation for activities."""

    client: Client

    def get_activity(self, activity_id: UUID) -> Activity | None:
        """Return an activity by id."""
        response = (
            self.client.table("activities")
            .select("*")
            .eq("id", str(activity_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_activity(response.data[0])

    def list_activities(
        self,
        user_id: UUID | None,
        start: datetime | None = None,
        end: datetime | None = None,
        activity_type: str | None = None,
    ) -> list[Activity]:
        """Return activities within a time range, newest first."""
        query = self.client.table("activities").select("*")
        if user_id is not None:
            query = query.eq("user_id", str(user_id))
        if start is not None:
            query = query.gte("date", start.isoformat())
        if end is not None:
            query = query.lt("date", end.isoformat())
        if activity_type:
            query = query.eq("type", activity_type)
        response = query.order("date", desc=True).execute()
        return [_parse_activity(row) for row in response.data or []]

    def create_activity(self, activity: Activity) -> Activity:
        """Insert an activity row."""
        response = (
            self.client.table("activities").insert(_activity_row(activity)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create activity")
        return _parse_activity(response.data[0])

    def update_activity(self, activity: Activity) -> Activity:
        """Update an activity row."""
        row = _activity_row(activity)
        row.pop("id")
        response = (
            self.client.table("activities")
            .update(row)
            .eq("id", str(activity.id))
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to update activity {activity.id}")
        return _parse_activity(response.data[0])

    def delete_activity(self, activity_id: UUID) -> None:
        """Delete an activity row."""
        self.client.table("activities").delete().eq("id", str(activity_id)).execute()

    def delete_activities_by_user(self, user_id: UUID) -> int:
        """Delete all activities of a user."""
        response = (
            self.client.table("activities")
            .delete()
            .eq("user_id", str(user_id))
            .execute()
        )
        return len(response.data or [])


def _activity_row(activity: Activity) -> dict[str, object]:
    return {
        "id": str(activity.id),
        "user_id": str(activity.user_id),
        "name": activity.name,
        "name_ar": activity.name_ar,
        "type": activity.type,
        "duration": activity.duration,
        "intensity": activity.intensity,
        "met_value": activity.met_value,
        "calories_burned": activity.calories_burned,
        "date": activity.date.isoformat(),
        "notes": activity.notes,
        "created_at": format_datetime(activity.created_at),
    }


def _parse_activity(row: dict[str, object]) -> Activity:
    return Activity(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        name_ar=row.get("name_ar"),
        type=str(row.get("type") or "other"),
        duration=int(row.get("duration") or 0),
        intensity=str(row.get("intensity") or "moderate"),
        met_value=float(row.get("met_value") or 0.0),
        calories_burned=int(row.get("calories_burned") or 0),
        date=datetime.fromisoformat(str(row["date"])),
        notes=row.get("notes"),
        created_at=parse_datetime(row.get("created_at")),
    )

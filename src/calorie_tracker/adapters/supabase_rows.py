"""Row conversion helpers shared by the Supabase repositories."""

from datetime import datetime
from uuid import UUID

from calorie_tracker.domain.nutrition import NutrientProfile


def parse_datetime(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


def parse_uuid(value: object) -> UUID | None:
    if isinstance(value, str) and value:
        return UUID(value)
    return None


def format_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def totals_columns(totals: NutrientProfile) -> dict[str, float]:
    """Flatten a totals profile into ``total_*`` columns."""
    return {f"total_{name}": value for name, value in totals.as_dict().items()}


def totals_from_row(row: dict[str, object]) -> NutrientProfile:
    return NutrientProfile.from_mapping(
        {
            name.removeprefix("total_"): value
            for name, value in row.items()
            if name.startswith("total_")
        }
    )

"""Domain models for statistics."""

from dataclasses import dataclass, field
from datetime import date

from calorie_tracker.domain.nutrition import NutrientProfile


@dataclass(frozen=True)
class DailyTotals:
    """Summed meal totals for a set of meals."""

    totals: NutrientProfile
    meal_count: int


@dataclass(frozen=True)
class DayBucket:
    """Macro totals for one calendar day."""

    day: str
    calories: float
    protein: float
    carbs: float
    fat: float
    meal_count: int


@dataclass(frozen=True)
class RangeStatistics:
    """Aggregated meal statistics over a date window."""

    start: date
    end: date
    total_meals: int
    days_with_data: int
    avg_calories_per_day: int
    avg_protein_per_day: float
    avg_carbs_per_day: float
    avg_fat_per_day: float
    most_logged_foods: dict[str, int] = field(default_factory=dict)
    category_breakdown: dict[str, float] = field(default_factory=dict)
    daily_data: list[DayBucket] = field(default_factory=list)


@dataclass(frozen=True)
class TypeBreakdown:
    """Activity totals for one activity type."""

    calories: int
    duration: int
    count: int


@dataclass(frozen=True)
class ActivityTotals:
    """Summed activity figures for a set of activities."""

    total_calories_burned: int
    total_duration: int
    activity_count: int
    type_breakdown: dict[str, TypeBreakdown] = field(default_factory=dict)


@dataclass(frozen=True)
class ActivityDay:
    """Activity totals for one calendar day."""

    day: str
    calories: int
    duration: int
    count: int


@dataclass(frozen=True)
class ActivitySummary:
    """Activity statistics over a date window."""

    start: date
    end: date
    totals: ActivityTotals
    avg_calories_per_activity: int
    avg_duration_per_activity: int
    daily_breakdown: list[ActivityDay] = field(default_factory=list)

"""Daily and range aggregation of meal and activity data."""

from collections import Counter, defaultdict
from collections.abc import Iterable, Sequence
from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from calorie_tracker.domain.activities import Activity
from calorie_tracker.domain.meals import Meal
from calorie_tracker.domain.stats import (
    ActivityDay,
    ActivitySummary,
    ActivityTotals,
    DailyTotals,
    DayBucket,
    RangeStatistics,
    TypeBreakdown,
)
from calorie_tracker.services.nutrition import round_half_up, sum_profiles


def day_window(day: date, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """Return the UTC bounds [start, end) of a calendar day in ``tz``."""
    return date_range_window(day, day, tz)


def date_range_window(
    start_day: date, end_day: date, tz: ZoneInfo
) -> tuple[datetime, datetime]:
    """Return UTC bounds covering ``start_day`` through ``end_day`` inclusive."""
    start = datetime.combine(start_day, time.min, tzinfo=tz)
    end = datetime.combine(end_day + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(UTC), end.astimezone(UTC)


def trailing_window(
    days: int, tz: ZoneInfo, now: datetime | None = None
) -> tuple[datetime, datetime]:
    """Return bounds for the last ``days`` calendar days including today."""
    today = (now or datetime.now(tz=UTC)).astimezone(tz).date()
    return date_range_window(today - timedelta(days=days - 1), today, tz)


def as_utc(moment: datetime) -> datetime:
    """Return ``moment`` in UTC, reading naive values as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def local_day(moment: datetime, tz: ZoneInfo) -> str:
    """Return the ISO calendar day of ``moment`` in ``tz``."""
    return as_utc(moment).astimezone(tz).date().isoformat()


def daily_totals(meals: Iterable[Meal]) -> DailyTotals:
    """Sum persisted meal totals."""
    meal_list = list(meals)
    return DailyTotals(
        totals=sum_profiles(meal.totals for meal in meal_list),
        meal_count=len(meal_list),
    )


def group_by_meal_type(meals: Iterable[Meal]) -> dict[str, list[Meal]]:
    grouped: dict[str, list[Meal]] = defaultdict(list)
    for meal in meals:
        grouped[meal.meal_type].append(meal)
    return dict(grouped)


def range_statistics(
    meals: Iterable[Meal], start: datetime, end: datetime, tz: ZoneInfo
) -> RangeStatistics:
    """Aggregate meals in [start, end) into per-day buckets and averages.

    Averages divide by the number of days that have at least one meal,
    not by the length of the window.
    """
    buckets: dict[str, dict[str, float]] = {}
    food_counts: Counter[str] = Counter()
    categories: dict[str, float] = defaultdict(float)
    total_meals = 0
    for meal in meals:
        if not start <= meal.date < end:
            continue
        total_meals += 1
        bucket = buckets.setdefault(
            local_day(meal.date, tz),
            {"calories": 0.0, "protein": 0.0, "carbs": 0.0, "fat": 0.0, "meals": 0},
        )
        bucket["calories"] += meal.totals.calories
        bucket["protein"] += meal.totals.protein
        bucket["carbs"] += meal.totals.carbs
        bucket["fat"] += meal.totals.fat
        bucket["meals"] += 1
        for item in meal.items:
            food_counts[item.name] += 1
            categories[item.category] += item.amount

    daily = [
        DayBucket(
            day=day,
            calories=round_half_up(values["calories"]),
            protein=round_half_up(values["protein"], 1),
            carbs=round_half_up(values["carbs"], 1),
            fat=round_half_up(values["fat"], 1),
            meal_count=int(values["meals"]),
        )
        for day, values in sorted(buckets.items())
    ]
    days_with_data = len(daily)
    denominator = days_with_data or 1
    return RangeStatistics(
        start=start.astimezone(tz).date(),
        end=(end - timedelta(microseconds=1)).astimezone(tz).date(),
        total_meals=total_meals,
        days_with_data=days_with_data,
        avg_calories_per_day=int(
            round_half_up(sum(day.calories for day in daily) / denominator)
        ),
        avg_protein_per_day=_average(daily, "protein", denominator),
        avg_carbs_per_day=_average(daily, "carbs", denominator),
        avg_fat_per_day=_average(daily, "fat", denominator),
        most_logged_foods=dict(food_counts.most_common()),
        category_breakdown={
            name: round_half_up(weight, 1) for name, weight in categories.items()
        },
        daily_data=daily,
    )


def _average(daily: Sequence[DayBucket], name: str, denominator: int) -> float:
    return round_half_up(sum(getattr(day, name) for day in daily) / denominator, 1)


def activity_totals(activities: Iterable[Activity]) -> ActivityTotals:
    """Sum calories and duration overall and per activity type."""
    calories = 0
    duration = 0
    count = 0
    by_type: dict[str, list[int]] = defaultdict(lambda: [0, 0, 0])
    for activity in activities:
        calories += activity.calories_burned
        duration += activity.duration
        count += 1
        entry = by_type[activity.type]
        entry[0] += activity.calories_burned
        entry[1] += activity.duration
        entry[2] += 1
    return ActivityTotals(
        total_calories_burned=calories,
        total_duration=duration,
        activity_count=count,
        type_breakdown={
            name: TypeBreakdown(calories=values[0], duration=values[1], count=values[2])
            for name, values in by_type.items()
        },
    )


def activity_summary(
    activities: Iterable[Activity], start: datetime, end: datetime, tz: ZoneInfo
) -> ActivitySummary:
    """Summarize activities in [start, end) with per-day breakdowns."""
    in_range = [activity for activity in activities if start <= activity.date < end]
    totals = activity_totals(in_range)
    days: dict[str, list[int]] = defaultdict(lambda: [0, 0, 0])
    for activity in in_range:
        entry = days[local_day(activity.date, tz)]
        entry[0] += activity.calories_burned
        entry[1] += activity.duration
        entry[2] += 1
    count = totals.activity_count or 1
    return ActivitySummary(
        start=start.astimezone(tz).date(),
        end=(end - timedelta(microseconds=1)).astimezone(tz).date(),
        totals=totals,
        avg_calories_per_activity=int(
            round_half_up(totals.total_calories_burned / count)
        ),
        avg_duration_per_activity=int(round_half_up(totals.total_duration / count)),
        daily_breakdown=[
            ActivityDay(
                day=day, calories=values[0], duration=values[1], count=values[2]
            )
            for day, values in sorted(days.items())
        ],
    )

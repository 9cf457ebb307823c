"""Energy expenditure calculators: MET calories, BMR, TDEE and goals."""

from calorie_tracker.domain.activities import Activity
from calorie_tracker.domain.models import DailyGoals, UserProfile
from calorie_tracker.services.nutrition import round_half_up

ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.55

GOAL_FACTORS = {
    "lose_weight": 0.85,
    "maintain_weight": 1.0,
    "gain_weight": 1.15,
}

# Share of calories per macro and kcal per gram.
PROTEIN_SHARE, PROTEIN_KCAL = 0.25, 4
CARBS_SHARE, CARBS_KCAL = 0.45, 4
FAT_SHARE, FAT_KCAL = 0.30, 9


def calories_burned(met: float, weight_kg: float, duration_minutes: float) -> int:
    """Estimate calories burned as MET x weight x hours."""
    return int(round_half_up(met * weight_kg * (duration_minutes / 60)))


def recalculate_calories(activity: Activity, weight_kg: float) -> int:
    """Recompute calories from the activity's stored MET and duration."""
    return calories_burned(activity.met_value, weight_kg, activity.duration)


def bmr(profile: UserProfile) -> int | None:
    """Return the Mifflin-St Jeor basal metabolic rate, or None if incomplete."""
    required = (profile.age, profile.gender, profile.height, profile.weight)
    if any(value is None for value in required):
        return None
    base = 10 * profile.weight + 6.25 * profile.height - 5 * profile.age
    value = base + 5 if profile.gender == "male" else base - 161
    return int(round_half_up(value))


def tdee(profile: UserProfile) -> int | None:
    """Return total daily energy expenditure, or None if BMR is unknown."""
    basal = bmr(profile)
    if basal is None:
        return None
    multiplier = ACTIVITY_MULTIPLIERS.get(
        profile.activity_level, DEFAULT_ACTIVITY_MULTIPLIER
    )
    return int(round_half_up(basal * multiplier))


def goal_calories(daily_expenditure: int, goal: str | None) -> int:
    """Adjust TDEE for a weight goal."""
    factor = GOAL_FACTORS.get(goal or "maintain_weight", 1.0)
    return int(round_half_up(daily_expenditure * factor))


def macro_goals(calories: int) -> DailyGoals:
    """Split a calorie target into protein, carbs and fat grams."""
    return DailyGoals(
        calories=calories,
        protein=int(round_half_up(calories * PROTEIN_SHARE / PROTEIN_KCAL)),
        carbs=int(round_half_up(calories * CARBS_SHARE / CARBS_KCAL)),
        fat=int(round_half_up(calories * FAT_SHARE / FAT_KCAL)),
    )


def recommended_goals(profile: UserProfile) -> DailyGoals | None:
    """Return daily goals derived from the profile, or None if incomplete."""
    expenditure = tdee(profile)
    if expenditure is None:
        return None
    return macro_goals(goal_calories(expenditure, profile.goal))

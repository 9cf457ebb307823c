"""Nutrition calculator and meal aggregation."""

import logging
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from calorie_tracker.domain.errors import InvalidFoodDataError
from calorie_tracker.domain.foods import Food
from calorie_tracker.domain.meals import MealItem
from calorie_tracker.domain.nutrition import (
    DEFAULT_SERVING,
    INTEGER_NUTRIENTS,
    NUTRIENT_FIELDS,
    NutrientProfile,
    ServingSize,
)

_logger = logging.getLogger(__name__)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round half away from zero at the given decimal precision."""
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    if digits == 0:
        return int(rounded)
    return float(rounded)


def round_profile(values: dict[str, float]) -> NutrientProfile:
    """Round calories and sodium to integers and the rest to one decimal."""
    rounded = {}
    for name in NUTRIENT_FIELDS:
        digits = 0 if name in INTEGER_NUTRIENTS else 1
        rounded[name] = round_half_up(values.get(name) or 0.0, digits)
    return NutrientProfile(**rounded)


def scaling_ratio(serving: ServingSize, amount: float, per_100g: bool = True) -> float:
    """Return the factor that maps the stored profile onto ``amount``."""
    if serving.is_discrete:
        return amount / serving.amount
    if per_100g and serving.unit == "g" and serving.amount == 100:  # noqa: PLR2004
        return amount / 100
    return amount / serving.amount


def compute_nutrition(
    profile: NutrientProfile | None,
    serving: ServingSize | None,
    amount: float,
    per_100g: bool = True,
) -> NutrientProfile:
    """Compute absolute nutrient quantities for a consumed amount."""
    if profile is None:
        raise InvalidFoodDataError("Food nutrition data is missing")
    if serving is None or serving.amount <= 0:
        _logger.warning(
            "Missing serving size, assuming %s %s",
            DEFAULT_SERVING.amount,
            DEFAULT_SERVING.unit,
        )
        serving = DEFAULT_SERVING
    ratio = scaling_ratio(serving, amount, per_100g)
    scaled = {
        name: (getattr(profile, name) or 0.0) * ratio for name in NUTRIENT_FIELDS
    }
    return round_profile(scaled)


def nutrition_for_food(food: Food, amount: float) -> NutrientProfile:
    """Compute a meal item snapshot for a food and consumed amount."""
    try:
        return compute_nutrition(
            food.nutrition, food.serving_size, amount, per_100g=food.per_100g
        )
    except InvalidFoodDataError as exc:
        raise InvalidFoodDataError(
            f"Food '{food.name}' has no nutrition data"
        ) from exc


def nutrition_per_serving(food: Food) -> NutrientProfile | None:
    """Return nutrition for one declared serving, if the food has data."""
    if food.nutrition is None:
        return None
    serving = food.serving_size or DEFAULT_SERVING
    return compute_nutrition(
        food.nutrition, serving, serving.amount, per_100g=food.per_100g
    )


def sum_profiles(profiles: Iterable[NutrientProfile]) -> NutrientProfile:
    """Sum profiles elementwise and round the sums."""
    sums = dict.fromkeys(NUTRIENT_FIELDS, 0.0)
    for profile in profiles:
        for name in NUTRIENT_FIELDS:
            sums[name] += getattr(profile, name) or 0.0
    return round_profile(sums)


def recompute_totals(items: Iterable[MealItem]) -> NutrientProfile:
    """Return meal totals from the items' nutrition snapshots."""
    return sum_profiles(item.nutrition for item in items)

"""Nutrition domain models."""

from collections.abc import Mapping
from dataclasses import dataclass

MASS_VOLUME_UNITS = ("g", "ml")
DISCRETE_UNITS = ("piece", "cup", "tbsp", "tsp")
SERVING_UNITS = MASS_VOLUME_UNITS + DISCRETE_UNITS

NUTRIENT_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "sugar", "sodium")
# Rounded to whole numbers; every other nutrient keeps one decimal.
INTEGER_NUTRIENTS = frozenset({"calories", "sodium"})


@dataclass(frozen=True)
class NutrientProfile:
    """Nutrient content for a reference quantity of a food."""

    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float = 0.0
    sugar: float = 0.0
    sodium: float = 0.0

    @classmethod
    def zero(cls) -> "NutrientProfile":
        return cls(calories=0, protein=0.0, carbs=0.0, fat=0.0, sodium=0)

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "NutrientProfile":
        """Build a profile treating missing or null fields as zero."""
        values = {}
        for name in NUTRIENT_FIELDS:
            raw = data.get(name)
            values[name] = float(raw) if isinstance(raw, int | float) else 0.0
        return cls(**values)

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in NUTRIENT_FIELDS}


@dataclass(frozen=True)
class ServingSize:
    """Reference serving that a nutrient profile describes."""

    amount: float = 100.0
    unit: str = "g"

    @property
    def is_discrete(self) -> bool:
        return self.unit in DISCRETE_UNITS


DEFAULT_SERVING = ServingSize(amount=100.0, unit="g")

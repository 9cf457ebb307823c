"""Domain models for activity logging."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

ACTIVITY_TYPES = ("cardio", "strength", "sports", "daily", "other")
INTENSITIES = ("low", "moderate", "high", "very_high")

DEFAULT_DURATION_MINUTES = 60
DEFAULT_MET_VALUE = 5.0


@dataclass(frozen=True)
class Activity:
    """A logged physical activity."""

    id: UUID
    user_id: UUID
    name: str
    type: str
    duration: int
    intensity: str
    met_value: float
    calories_burned: int
    date: datetime
    name_ar: str | None = None
    notes: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class ActivityTemplate:
    """A predefined activity with its MET value."""

    name: str
    name_ar: str
    type: str
    met_value: float
    intensity: str


PREDEFINED_ACTIVITIES = (
    ActivityTemplate("Walking (slow pace)", "المشي (بطيء)", "cardio", 3.0, "low"),
    ActivityTemplate(
        "Walking (moderate pace)", "المشي (متوسط)", "cardio", 3.5, "moderate"
    ),
    ActivityTemplate("Walking (fast pace)", "المشي (سريع)", "cardio", 4.3, "high"),
    ActivityTemplate("Jogging", "الهرولة", "cardio", 7.0, "high"),
    ActivityTemplate("Running (6 mph)", "الجري (متوسط)", "cardio", 9.8, "high"),
    ActivityTemplate("Running (8 mph)", "الجري (سريع)", "cardio", 11.8, "very_high"),
    ActivityTemplate("Cycling (leisure)", "ركوب الدراجة (ترفيهي)", "cardio", 4.0, "low"),
    ActivityTemplate(
        "Cycling (moderate)", "ركوب الدراجة (متوسط)", "cardio", 6.8, "moderate"
    ),
    ActivityTemplate(
        "Cycling (vigorous)", "ركوب الدراجة (مكثف)", "cardio", 10.0, "high"
    ),
    ActivityTemplate(
        "Swimming (leisure)", "السباحة (ترفيهية)", "cardio", 6.0, "moderate"
    ),
    ActivityTemplate("Swimming (vigorous)", "السباحة (مكثفة)", "cardio", 10.0, "high"),
    ActivityTemplate(
        "Weight lifting (light)", "رفع الأثقال (خفيف)", "strength", 3.0, "low"
    ),
    ActivityTemplate(
        "Weight lifting (moderate)", "رفع الأثقال (متوسط)", "strength", 5.0, "moderate"
    ),
    ActivityTemplate(
        "Weight lifting (vigorous)", "رفع الأثقال (مكثف)", "strength", 6.0, "high"
    ),
    ActivityTemplate(
        "Bodyweight exercises", "تمارين وزن الجسم", "strength", 4.5, "moderate"
    ),
    ActivityTemplate("Push-ups, sit-ups", "الضغط والبطن", "strength", 3.8, "moderate"),
    ActivityTemplate("Football/Soccer", "كرة القدم", "sports", 7.0, "high"),
    ActivityTemplate("Basketball", "كرة السلة", "sports", 6.5, "high"),
    ActivityTemplate("Tennis", "التنس", "sports", 7.3, "high"),
    ActivityTemplate("Volleyball", "الكرة الطائرة", "sports", 4.0, "moderate"),
    ActivityTemplate("Badminton", "الريشة الطائرة", "sports", 5.5, "moderate"),
    ActivityTemplate("Household cleaning", "تنظيف المنزل", "daily", 3.3, "low"),
    ActivityTemplate("Gardening", "البستنة", "daily", 4.0, "moderate"),
    ActivityTemplate("Stairs climbing", "صعود الدرج", "daily", 8.0, "high"),
    ActivityTemplate("Dancing", "الرقص", "other", 4.8, "moderate"),
    ActivityTemplate("Yoga", "اليوغا", "other", 2.5, "low"),
    ActivityTemplate("Pilates", "البيلاتس", "other", 3.0, "low"),
)

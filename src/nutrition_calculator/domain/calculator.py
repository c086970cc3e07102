"""Calculator input and target domain models."""

from dataclasses import dataclass
from typing import Literal

Gender = Literal["male", "female"]
DeficitMode = Literal["percent", "calories"]

TARGET_FIELDS = ("calories", "protein", "carbs", "fat", "fiber")

# Physical activity level multipliers offered by the editor, in display order.
PAL_OPTIONS = (1.1, 1.3, 1.4, 1.6, 1.7)

DEFICIT_PERCENT_RANGE = (-20, 20)
DEFICIT_CALORIES_RANGE = (-2000, 2000)
PROTEIN_PER_KG_RANGE = (1.5, 3.0)
FAT_PER_KG_RANGE = (0.5, 1.5)
CARBS_PER_KG_RANGE = (1.0, 4.0)


@dataclass(frozen=True)
class CalculatorInputs:
    """Biometric, activity and goal settings for one client."""

    weight: float = 70.0
    height: float = 170.0
    age: float = 30.0
    gender: Gender = "male"
    waist: float = 80.0
    hip: float = 95.0
    neck: float = 35.0
    pal: float = 1.4
    caloric_deficit_mode: DeficitMode = "percent"
    caloric_deficit_percent: int = 0
    caloric_deficit_calories: int = 0
    protein_per_kg: float = 2.0
    fat_per_kg: float = 1.0
    carbs_per_kg: float = 2.0


@dataclass(frozen=True)
class ActivityEntry:
    """One row of the weekly exercise table."""

    id: str
    activity_type: str
    mets: float
    minutes_per_week: int


@dataclass(frozen=True)
class Targets:
    """Daily calorie and macro targets stored on a nutrition plan."""

    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float


@dataclass(frozen=True)
class ManualOverrideFlags:
    """Which target fields are pinned by the coach."""

    calories: bool = False
    protein: bool = False
    carbs: bool = False
    fat: bool = False
    fiber: bool = False


DEFAULT_TARGETS = Targets(calories=2000, protein=150, carbs=200, fat=65, fiber=30)


_DEFAULT_ACTIVITIES = (
    ("Slow walk / yoga / pilates", 3.5),
    ("Heavy weight training", 5.5),
    ("Studio / functional / aerobic", 6.0),
    ("Light run / jogging", 7.5),
    ("Fast run / fast swim / spinning", 10.0),
)


def default_activity_entries() -> list[ActivityEntry]:
    """Return the starter activity table shown for a new plan."""
    return [
        ActivityEntry(id=str(index), activity_type=label, mets=mets, minutes_per_week=0)
        for index, (label, mets) in enumerate(_DEFAULT_ACTIVITIES, start=1)
    ]

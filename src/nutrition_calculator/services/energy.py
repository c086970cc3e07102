"""Basal metabolic rate, exercise energy and TDEE calculations."""

import math
from collections.abc import Iterable

from nutrition_calculator.domain.calculator import (
    ActivityEntry,
    CalculatorInputs,
    Gender,
)
from nutrition_calculator.domain.results import BmrResults, EnergyExpenditure

DAYS_PER_WEEK = 7


def mifflin_st_jeor(weight: float, height: float, age: float, gender: Gender) -> float:
    """Mifflin-St Jeor BMR in kcal/day."""
    base = 10 * weight + 6.25 * height - 5 * age
    return base + 5 if gender == "male" else base - 161


def harris_benedict(weight: float, height: float, age: float, gender: Gender) -> float:
    """Revised Harris-Benedict BMR in kcal/day."""
    if gender == "male":
        return 88.362 + 13.397 * weight + 4.799 * height - 5.677 * age
    return 447.593 + 9.247 * weight + 3.098 * height - 4.330 * age


def katch_mcardle(lean_body_mass_kg: float | None) -> float | None:
    """Katch-McArdle BMR, available only with a lean body mass."""
    if lean_body_mass_kg is None or lean_body_mass_kg <= 0:
        return None
    return 370 + 21.6 * lean_body_mass_kg


def calculate_bmr(
    inputs: CalculatorInputs, lean_body_mass_kg: float | None
) -> BmrResults:
    """Run all BMR formulas and average the usable ones."""
    mifflin = mifflin_st_jeor(inputs.weight, inputs.height, inputs.age, inputs.gender)
    harris = harris_benedict(inputs.weight, inputs.height, inputs.age, inputs.gender)
    katch = katch_mcardle(lean_body_mass_kg)
    usable = [
        value
        for value in (mifflin, harris, katch)
        if value is not None and math.isfinite(value) and value > 0
    ]
    average = sum(usable) / len(usable) if usable else 0.0
    return BmrResults(
        mifflin_st_jeor=mifflin,
        harris_benedict=harris,
        katch_mcardle=katch,
        average=average,
    )


def exercise_kcal_per_minute(mets: float, weight: float) -> float:
    """Energy burned per minute of an activity at the given METs."""
    return mets * 3.5 * weight / 200


def exercise_energy_expenditure(
    entries: Iterable[ActivityEntry], weight: float
) -> float:
    """Return the daily average exercise energy from the weekly activity table.

    Rows with no intensity or no minutes contribute nothing.
    """
    if weight <= 0:
        return 0.0
    weekly = 0.0
    for entry in entries:
        if entry.mets <= 0 or entry.minutes_per_week <= 0:
            continue
        weekly += exercise_kcal_per_minute(entry.mets, weight) * entry.minutes_per_week
    return weekly / DAYS_PER_WEEK


def calculate_energy(
    inputs: CalculatorInputs,
    entries: Iterable[ActivityEntry],
    lean_body_mass_kg: float | None,
) -> EnergyExpenditure:
    """Combine BMR, PAL and tracked exercise into total daily expenditure."""
    bmr = calculate_bmr(inputs, lean_body_mass_kg)
    exercise_ee = exercise_energy_expenditure(entries, inputs.weight)
    return EnergyExpenditure(
        bmr=bmr,
        exercise_ee=exercise_ee,
        tdee=bmr.average * inputs.pal + exercise_ee,
    )

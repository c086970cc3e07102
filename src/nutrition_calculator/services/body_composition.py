"""Body composition from circumference measurements (U.S. Navy method)."""

import math

from nutrition_calculator.domain.calculator import CalculatorInputs, Gender
from nutrition_calculator.domain.results import BodyComposition

_MALE = (1.0324, 0.19077, 0.15456)
_FEMALE = (1.29579, 0.35004, 0.22100)


def navy_body_fat_percent(  # noqa: PLR0913
    *,
    gender: Gender,
    height: float,
    waist: float,
    neck: float,
    hip: float = 0.0,
) -> float | None:
    """Estimate body fat percent, or None when the measurements don't allow it.

    All lengths are centimeters. Women need a hip measurement. The result is
    None when a required measurement is unset or the logarithm argument is
    not positive (e.g. waist <= neck for men).
    """
    if waist <= 0 or neck <= 0 or height <= 0:
        return None
    if gender == "male":
        girth = waist - neck
        base, girth_factor, height_factor = _MALE
    else:
        if hip <= 0:
            return None
        girth = waist + hip - neck
        base, girth_factor, height_factor = _FEMALE
    if girth <= 0:
        return None

    density = (
        base - girth_factor * math.log10(girth) + height_factor * math.log10(height)
    )
    if density <= 0:
        return None
    body_fat = 495 / density - 450
    if not math.isfinite(body_fat):
        return None
    return max(0.0, min(100.0, body_fat))


def lean_body_mass(weight: float, body_fat_percent: float | None) -> float | None:
    """Return lean body mass in kg when body fat is known."""
    if body_fat_percent is None or weight <= 0:
        return None
    return weight * (1 - body_fat_percent / 100)


def calculate_body_composition(inputs: CalculatorInputs) -> BodyComposition:
    """Derive body fat and lean mass from the calculator inputs."""
    body_fat = navy_body_fat_percent(
        gender=inputs.gender,
        height=inputs.height,
        waist=inputs.waist,
        neck=inputs.neck,
        hip=inputs.hip,
    )
    return BodyComposition(
        body_fat_percent=body_fat,
        lean_body_mass_kg=lean_body_mass(inputs.weight, body_fat),
    )

"""Tests for Navy-method body composition."""

import pytest

from nutrition_calculator.domain.calculator import CalculatorInputs
from nutrition_calculator.services.body_composition import (
    calculate_body_composition,
    lean_body_mass,
    navy_body_fat_percent,
)


def test_male_body_fat_in_expected_range() -> None:
    body_fat = navy_body_fat_percent(gender="male", height=175, waist=85, neck=38)

    assert body_fat is not None
    assert 15 < body_fat < 20


def test_female_body_fat_uses_hip() -> None:
    body_fat = navy_body_fat_percent(
        gender="female", height=165, waist=70, neck=32, hip=95
    )

    assert body_fat is not None
    assert 20 < body_fat < 30


@pytest.mark.parametrize(("waist", "neck"), [(38, 38), (35, 40)])
def test_male_body_fat_none_when_waist_not_above_neck(
    waist: float, neck: float
) -> None:
    body_fat = navy_body_fat_percent(gender="male", height=175, waist=waist, neck=neck)

    assert body_fat is None


@pytest.mark.parametrize(
    ("waist", "hip", "neck"), [(20, 15, 35), (10, 10, 40)]
)
def test_female_body_fat_none_when_girth_not_positive(
    waist: float, hip: float, neck: float
) -> None:
    inputs = CalculatorInputs(
        gender="female", height=165, waist=waist, hip=hip, neck=neck
    )

    result = calculate_body_composition(inputs)

    assert result.body_fat_percent is None
    assert result.lean_body_mass_kg is None


def test_female_body_fat_requires_hip() -> None:
    assert (
        navy_body_fat_percent(gender="female", height=165, waist=70, neck=32, hip=0)
        is None
    )


@pytest.mark.parametrize(
    ("height", "waist", "neck"), [(0, 85, 38), (175, 0, 38), (175, 85, 0)]
)
def test_body_fat_none_when_measurement_missing(
    height: float, waist: float, neck: float
) -> None:
    assert (
        navy_body_fat_percent(gender="male", height=height, waist=waist, neck=neck)
        is None
    )


def test_lean_body_mass_from_body_fat() -> None:
    assert lean_body_mass(80, 25) == pytest.approx(60)
    assert lean_body_mass(80, None) is None


def test_calculate_body_composition_degrades_to_none() -> None:
    inputs = CalculatorInputs(waist=30, neck=40)

    result = calculate_body_composition(inputs)

    assert result.body_fat_percent is None
    assert result.lean_body_mass_kg is None


def test_calculate_body_composition_for_defaults() -> None:
    result = calculate_body_composition(CalculatorInputs())

    assert result.body_fat_percent == pytest.approx(16.21, abs=0.05)
    assert result.lean_body_mass_kg == pytest.approx(
        70 * (1 - result.body_fat_percent / 100)
    )

"""Tests for the calculation pipeline and stored target rounding."""

from nutrition_calculator.domain.calculator import (
    CalculatorInputs,
    default_activity_entries,
)
from nutrition_calculator.domain.overrides import Auto, Manual
from nutrition_calculator.domain.results import MacroTargets
from nutrition_calculator.services.pipeline import (
    calculate_breakdown,
    calculated_targets,
    recompute,
)


def test_rounded_targets_stay_within_calories() -> None:
    entries = default_activity_entries()
    for weight in (40.7, 55.3, 68.0, 81.9, 97.4, 118.6, 139.5):
        for protein_per_kg in (1.5, 1.8, 2.1, 2.4, 2.7):
            for fat_per_kg in (0.5, 0.7, 0.9, 1.1, 1.3):
                inputs = CalculatorInputs(
                    weight=weight,
                    protein_per_kg=protein_per_kg,
                    fat_per_kg=fat_per_kg,
                )
                targets = calculated_targets(
                    calculate_breakdown(inputs, entries).macros
                )
                fixed = targets.protein * 4 + targets.fat * 9
                assert targets.carbs >= 0
                if fixed <= targets.calories:
                    total = fixed + targets.carbs * 4
                    assert targets.calories - 4 < total <= targets.calories


def test_rounding_example_from_light_client() -> None:
    macros = MacroTargets(
        calories=1731.2, protein=61.05, fat=36.63, carbs=289.4, fiber=24.2
    )

    targets = calculated_targets(macros)

    assert (targets.calories, targets.protein, targets.fat) == (1731, 61, 37)
    assert targets.carbs == (1731 - 61 * 4 - 37 * 9) // 4
    assert targets.protein * 4 + targets.carbs * 4 + targets.fat * 9 <= 1731


def test_carbs_clamped_when_protein_and_fat_exceed_calories() -> None:
    macros = MacroTargets(calories=900, protein=200, fat=80, carbs=0, fiber=12.6)

    assert calculated_targets(macros).carbs == 0


def test_recompute_passes_manual_values_through() -> None:
    inputs = CalculatorInputs()
    entries = default_activity_entries()
    states = {
        "calories": Manual(2750),
        "protein": Auto(0),
        "carbs": Auto(0),
        "fat": Auto(0),
        "fiber": Auto(0),
    }

    targets = recompute(inputs, entries, states)

    fresh = calculated_targets(calculate_breakdown(inputs, entries).macros)
    assert targets.calories == 2750
    assert targets.protein == fresh.protein
    assert targets.carbs == fresh.carbs

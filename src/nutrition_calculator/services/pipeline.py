"""Pure calculation pipeline from inputs to targets."""

from collections.abc import Iterable, Mapping

from nutrition_calculator.domain.calculator import (
    TARGET_FIELDS,
    ActivityEntry,
    CalculatorInputs,
    Targets,
)
from nutrition_calculator.domain.overrides import FieldState, Manual
from nutrition_calculator.domain.results import CalculationBreakdown, MacroTargets
from nutrition_calculator.services.body_composition import calculate_body_composition
from nutrition_calculator.services.energy import calculate_energy
from nutrition_calculator.services.macros import KCAL_PER_GRAM, calculate_macros


def calculate_breakdown(
    inputs: CalculatorInputs, entries: Iterable[ActivityEntry]
) -> CalculationBreakdown:
    """Run body composition, energy and macro calculators in order."""
    body = calculate_body_composition(inputs)
    energy = calculate_energy(inputs, entries, body.lean_body_mass_kg)
    return CalculationBreakdown(
        body_composition=body,
        energy=energy,
        macros=calculate_macros(energy.tdee, inputs),
    )


def calculated_targets(macros: MacroTargets) -> Targets:
    """Round formula output to the whole numbers stored on a plan.

    Carbs are taken from what the rounded calories, protein and fat leave
    over, so the stored macros never exceed the stored calories.
    """
    calories = round(macros.calories)
    protein = round(macros.protein)
    fat = round(macros.fat)
    remaining = (
        calories - protein * KCAL_PER_GRAM["protein"] - fat * KCAL_PER_GRAM["fat"]
    )
    return Targets(
        calories=calories,
        protein=protein,
        carbs=max(0, remaining // KCAL_PER_GRAM["carbs"]),
        fat=fat,
        fiber=round(macros.fiber),
    )


def recompute(
    inputs: CalculatorInputs,
    entries: Iterable[ActivityEntry],
    states: Mapping[str, FieldState],
) -> Targets:
    """Return targets with pinned fields kept and the rest recalculated."""
    fresh = calculated_targets(calculate_breakdown(inputs, entries).macros)
    values = {}
    for name in TARGET_FIELDS:
        state = states.get(name)
        if isinstance(state, Manual):
            values[name] = state.value
        else:
            values[name] = getattr(fresh, name)
    return Targets(**values)

"""Calorie and macronutrient target calculations."""

from nutrition_calculator.domain.calculator import CalculatorInputs, Targets
from nutrition_calculator.domain.results import MacroPercentages, MacroTargets

KCAL_PER_GRAM = {"protein": 4, "carbs": 4, "fat": 9}
FIBER_GRAMS_PER_1000_KCAL = 14


def adjusted_calories(tdee: float, inputs: CalculatorInputs) -> float:
    """Apply the deficit or surplus selected by the calculator mode."""
    if inputs.caloric_deficit_mode == "percent":
        calories = tdee * (1 + inputs.caloric_deficit_percent / 100)
    else:
        calories = tdee + inputs.caloric_deficit_calories
    return max(0.0, calories)


def fiber_for_calories(calories: float) -> float:
    """Default fiber heuristic of 14 g per 1000 kcal."""
    return max(0.0, calories) / 1000 * FIBER_GRAMS_PER_1000_KCAL


def calculate_macros(tdee: float, inputs: CalculatorInputs) -> MacroTargets:
    """Turn expenditure and per-kg ratios into daily targets.

    Protein and fat follow their grams-per-kg ratios; carbohydrate fills
    whatever calorie budget is left and never goes negative.
    """
    calories = adjusted_calories(tdee, inputs)
    protein = inputs.protein_per_kg * inputs.weight
    fat = inputs.fat_per_kg * inputs.weight
    remaining = (
        calories - protein * KCAL_PER_GRAM["protein"] - fat * KCAL_PER_GRAM["fat"]
    )
    carbs = max(0.0, remaining / KCAL_PER_GRAM["carbs"])
    return MacroTargets(
        calories=calories,
        protein=protein,
        fat=fat,
        carbs=carbs,
        fiber=fiber_for_calories(calories),
    )


def macro_percentages(targets: Targets | MacroTargets) -> MacroPercentages:
    """Return each macro's share of macro calories, for display."""
    protein_kcal = targets.protein * KCAL_PER_GRAM["protein"]
    carbs_kcal = targets.carbs * KCAL_PER_GRAM["carbs"]
    fat_kcal = targets.fat * KCAL_PER_GRAM["fat"]
    total = protein_kcal + carbs_kcal + fat_kcal
    if total <= 0:
        return MacroPercentages(protein=0, carbs=0, fat=0)
    return MacroPercentages(
        protein=round(protein_kcal / total * 100),
        carbs=round(carbs_kcal / total * 100),
        fat=round(fat_kcal / total * 100),
    )

"""Derived calculator results shown beside the target editor."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BodyComposition:
    """Navy-method body fat and the lean mass derived from it."""

    body_fat_percent: float | None
    lean_body_mass_kg: float | None


@dataclass(frozen=True)
class BmrResults:
    """Basal metabolic rate per formula, unrounded."""

    mifflin_st_jeor: float
    harris_benedict: float
    katch_mcardle: float | None
    average: float

    def rounded(self) -> "BmrResults":
        """Return a copy with whole-kcal values for display."""
        return BmrResults(
            mifflin_st_jeor=round(self.mifflin_st_jeor),
            harris_benedict=round(self.harris_benedict),
            katch_mcardle=(
                round(self.katch_mcardle) if self.katch_mcardle is not None else None
            ),
            average=round(self.average),
        )


@dataclass(frozen=True)
class EnergyExpenditure:
    """BMR, tracked exercise and total daily energy expenditure."""

    bmr: BmrResults
    exercise_ee: float
    tdee: float

    @property
    def rounded_tdee(self) -> int:
        """TDEE rounded to whole kcal."""
        return round(self.tdee)


@dataclass(frozen=True)
class MacroTargets:
    """Unrounded calorie and macro targets produced by the formulas."""

    calories: float
    protein: float
    fat: float
    carbs: float
    fiber: float


@dataclass(frozen=True)
class MacroPercentages:
    """Share of macro calories per macronutrient, in whole percent."""

    protein: int
    carbs: int
    fat: int


@dataclass(frozen=True)
class CalculationBreakdown:
    """Everything the calculator derives from one set of inputs."""

    body_composition: BodyComposition
    energy: EnergyExpenditure
    macros: MacroTargets

"""Domain models for nutrition plans."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class NutritionPlanRecord:
    """Represents the calculator-relevant columns of a nutrition plan."""

    id: UUID
    targets: dict[str, object]
    calculator_inputs: dict[str, object] | None

"""Nutrition plan service for loading and saving calculator state."""

import logging
from dataclasses import asdict, dataclass
from typing import Protocol
from uuid import UUID

from nutrition_calculator.domain.plans import NutritionPlanRecord
from nutrition_calculator.services.editor import NutritionEditorSession
from nutrition_calculator.services.recalculation import (
    DEFAULT_DELAY_SECONDS,
    Clock,
)

_logger = logging.getLogger(__name__)


class PlanNotFoundError(LookupError):
    """Raised when a nutrition plan does not exist."""


class NutritionPlanRepository(Protocol):
    """Persistence interface for nutrition plans."""

    def get_plan(self, plan_id: UUID) -> NutritionPlanRecord | None:
        """Return a plan by id, if present."""

    def save_calculator_state(
        self,
        plan_id: UUID,
        targets: dict[str, object],
        calculator_inputs: dict[str, object],
    ) -> NutritionPlanRecord:
        """Persist targets and the calculator snapshot, returning the row."""


@dataclass
class NutritionPlanService:
    """Service opening editor sessions for plans and saving their results."""

    repository: NutritionPlanRepository
    delay_seconds: float = DEFAULT_DELAY_SECONDS

    def get_plan(self, plan_id: UUID) -> NutritionPlanRecord:
        """Return a plan or raise PlanNotFoundError."""
        plan = self.repository.get_plan(plan_id)
        if plan is None:
            raise PlanNotFoundError(f"Nutrition plan {plan_id} not found")
        return plan

    def open_editor(self, plan_id: UUID, clock: Clock) -> NutritionEditorSession:
        """Load a plan into a new editor session."""
        plan = self.get_plan(plan_id)
        return NutritionEditorSession.from_records(
            plan.targets,
            plan.calculator_inputs,
            clock=clock,
            delay_seconds=self.delay_seconds,
        )

    def save(
        self, plan_id: UUID, session: NutritionEditorSession
    ) -> dict[str, dict[str, object]]:
        """Write the session's targets and inputs back to the plan."""
        payload = session.save_payload()
        self.repository.save_calculator_state(
            plan_id,
            targets=payload["targets"],
            calculator_inputs=payload["calculator_inputs"],
        )
        locked = [name for name, value in asdict(session.flags).items() if value]
        _logger.info(
            "Saved nutrition plan %s: calories=%s locked=%s",
            plan_id,
            session.targets.calories,
            locked,
        )
        return payload

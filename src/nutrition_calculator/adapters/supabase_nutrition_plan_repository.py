"""Supabase repository for nutrition plans."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutrition_calculator.domain.plans import NutritionPlanRecord
from nutrition_calculator.services.plans import NutritionPlanRepository


@dataclass
class SupabaseNutritionPlanRepository(NutritionPlanRepository):
    """Supabase implementation for nutrition plan calculator state."""

    client: Client
    table_name: str = "nutrition_plans"

    def get_plan(self, plan_id: UUID) -> NutritionPlanRecord | None:
        """Return the plan's targets and calculator snapshot."""
        response = (
            self.client.table(self.table_name)
            .select("id, targets, calculator_inputs")
            .eq("id", str(plan_id))
            .is_("deleted_at", "null")
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_record(response.data[0])

    def save_calculator_state(
        self,
        plan_id: UUID,
        targets: dict[str, object],
        calculator_inputs: dict[str, object],
    ) -> NutritionPlanRecord:
        """Update targets and calculator inputs on the plan row."""
        response = (
            self.client.table(self.table_name)
            .update(
                {
                    "targets": targets,
                    "calculator_inputs": calculator_inputs,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(plan_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to save nutrition plan {plan_id}")
        return _to_record(response.data[0])


def _to_record(row: dict[str, object]) -> NutritionPlanRecord:
    targets = row.get("targets")
    calculator_inputs = row.get("calculator_inputs")
    return NutritionPlanRecord(
        id=UUID(str(row["id"])),
        targets=targets if isinstance(targets, dict) else {},
        calculator_inputs=(
            calculator_inputs if isinstance(calculator_inputs, dict) else None
        ),
    )

"""Nutrition plan editor session tying inputs, locks and recalculation."""

import logging
from collections.abc import Mapping

from nutrition_calculator.domain.calculator import (
    ActivityEntry,
    CalculatorInputs,
    ManualOverrideFlags,
    Targets,
)
from nutrition_calculator.domain.results import CalculationBreakdown, MacroPercentages
from nutrition_calculator.services.inputs import InputModel, coerce_number
from nutrition_calculator.services.macros import macro_percentages
from nutrition_calculator.services.overrides import OverrideLedger
from nutrition_calculator.services.pipeline import calculate_breakdown, recompute
from nutrition_calculator.services.recalculation import (
    DEFAULT_DELAY_SECONDS,
    Clock,
    RecalculationScheduler,
)
from nutrition_calculator.services.records import (
    entries_from_record,
    input_name,
    inputs_from_record,
    inputs_to_record,
    targets_from_record,
    targets_to_record,
)

_logger = logging.getLogger(__name__)


class NutritionEditorSession:
    """State for one open nutrition-plan editor.

    Input edits restart the debounce timer; when it fires, calculated values
    are written into unlocked targets only.
    """

    def __init__(
        self,
        model: InputModel,
        ledger: OverrideLedger,
        clock: Clock,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
    ) -> None:
        self.model = model
        self.ledger = ledger
        self.scheduler = RecalculationScheduler(
            clock=clock,
            recalculate=self.apply_calculated_values,
            should_schedule=ledger.has_auto_fields,
            delay_seconds=delay_seconds,
        )
        model.subscribe(self.scheduler.notify_change)

    @classmethod
    def from_records(
        cls,
        targets: Mapping[str, object] | None,
        calculator_inputs: Mapping[str, object] | None,
        clock: Clock,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
    ) -> "NutritionEditorSession":
        """Open a session from stored plan JSON, restoring lock flags."""
        inputs, entries = inputs_from_record(calculator_inputs)
        stored_targets, flags = targets_from_record(targets)
        return cls(
            model=InputModel(inputs=inputs, entries=entries),
            ledger=OverrideLedger.from_targets(stored_targets, flags),
            clock=clock,
            delay_seconds=delay_seconds,
        )

    @property
    def inputs(self) -> CalculatorInputs:
        return self.model.inputs

    @property
    def entries(self) -> list[ActivityEntry]:
        return self.model.entries

    @property
    def targets(self) -> Targets:
        return self.ledger.targets()

    @property
    def flags(self) -> ManualOverrideFlags:
        return self.ledger.flags()

    def set_input(self, key: str, raw: object) -> None:
        """Apply a form edit to one calculator input."""
        self.model.set_input(input_name(key), raw)

    def update_inputs(self, values: Mapping[str, object]) -> None:
        """Apply several form edits as one change."""
        self.model.update_inputs({input_name(key): raw for key, raw in values.items()})

    def add_activity_entry(self) -> ActivityEntry:
        return self.model.add_activity_entry()

    def update_activity_entry(self, entry_id: str, **updates: object) -> None:
        self.model.update_activity_entry(entry_id, **updates)

    def remove_activity_entry(self, entry_id: str) -> None:
        self.model.remove_activity_entry(entry_id)

    def replace_activity_entries(self, raw_entries: list[object]) -> None:
        """Replace the activity table from stored-format rows."""
        self.model.replace_activity_entries(entries_from_record(raw_entries))

    def set_target(self, name: str, raw: object) -> None:
        """Store a coach-entered target, pinning the field."""
        self.ledger.set_value(name, coerce_number(raw))
        self.scheduler.notify_change()

    def lock(self, name: str) -> None:
        self.ledger.lock(name)
        self.scheduler.notify_change()

    def unlock(self, name: str) -> None:
        """Hand a field back to the calculator and schedule a recompute."""
        self.ledger.unlock(name)
        self.scheduler.notify_change()

    def toggle_lock(self, name: str) -> bool:
        manual = self.ledger.toggle_lock(name)
        self.scheduler.notify_change()
        return manual

    def reset(self) -> None:
        """Start the plan over from default inputs, targets and no locks.

        The ledger is cleared first so the input reset schedules a
        recompute for the now-unlocked fields.
        """
        self.ledger.reset()
        self.model.reset()

    def can_calculate(self) -> bool:
        """Return True when the core biometrics needed for BMR are set."""
        inputs = self.model.inputs
        return inputs.weight > 0 and inputs.height > 0 and inputs.age > 0

    def breakdown(self) -> CalculationBreakdown:
        """Return every derived value for the current inputs."""
        return calculate_breakdown(self.model.inputs, self.model.entries)

    def macro_percentages(self) -> MacroPercentages:
        return macro_percentages(self.ledger.targets())

    def apply_calculated_values(self) -> list[str]:
        """Write fresh calculator output into unlocked targets.

        Returns the names of the fields whose value changed.
        """
        if not self.can_calculate():
            _logger.debug("Skipping recalculation: weight, height or age unset")
            return []
        if not self.ledger.has_auto_fields():
            return []
        calculated = recompute(
            self.model.inputs, self.model.entries, self.ledger.states()
        )
        updated = self.ledger.apply_calculated_values(calculated)
        if updated:
            _logger.debug("Recalculated targets: %s", ", ".join(updated))
        return updated

    def recalculate_now(self) -> list[str]:
        """Drop any pending timer and recalculate immediately."""
        self.scheduler.cancel()
        return self.apply_calculated_values()

    def save_payload(self) -> dict[str, dict[str, object]]:
        """Return the record written back to the plan on save.

        A pending recalculation runs first so targets match the saved inputs.
        """
        self.scheduler.flush()
        return {
            "targets": targets_to_record(self.ledger.targets(), self.ledger.flags()),
            "calculator_inputs": inputs_to_record(
                self.model.inputs, self.model.entries
            ),
        }

"""Tracks which calculator targets are pinned by the coach."""

from dataclasses import dataclass, field

from nutrition_calculator.domain.calculator import (
    DEFAULT_TARGETS,
    TARGET_FIELDS,
    ManualOverrideFlags,
    Targets,
)
from nutrition_calculator.domain.overrides import Auto, FieldState, Manual


def _default_states() -> dict[str, FieldState]:
    return {name: Auto(getattr(DEFAULT_TARGETS, name)) for name in TARGET_FIELDS}


@dataclass
class OverrideLedger:
    """Current target values, each either calculator-owned or coach-pinned.

    Recompute results only ever replace ``Auto`` fields. A ``Manual`` field
    keeps its value until the coach unlocks it or edits it again.
    """

    _states: dict[str, FieldState] = field(default_factory=_default_states)

    @classmethod
    def from_targets(
        cls, targets: Targets, flags: ManualOverrideFlags | None = None
    ) -> "OverrideLedger":
        """Build a ledger from stored targets and lock flags."""
        resolved_flags = flags or ManualOverrideFlags()
        states: dict[str, FieldState] = {}
        for name in TARGET_FIELDS:
            value = getattr(targets, name)
            if getattr(resolved_flags, name):
                states[name] = Manual(value)
            else:
                states[name] = Auto(value)
        return cls(states)

    def state(self, name: str) -> FieldState:
        """Return the state of a target field."""
        return self._states[_check_field(name)]

    def states(self) -> dict[str, FieldState]:
        """Return a copy of all field states."""
        return dict(self._states)

    def is_manual(self, name: str) -> bool:
        """Return True when the field is pinned."""
        return isinstance(self.state(name), Manual)

    def has_auto_fields(self) -> bool:
        """Return True when recompute still owns at least one field."""
        return any(isinstance(state, Auto) for state in self._states.values())

    def set_value(self, name: str, value: float) -> None:
        """Store a coach-entered value and pin the field."""
        self._states[_check_field(name)] = Manual(max(0.0, value))

    def lock(self, name: str) -> None:
        """Pin the field at its current value."""
        self._states[name] = Manual(self.state(name).value)

    def unlock(self, name: str) -> None:
        """Hand the field back to the calculator."""
        self._states[name] = Auto(self.state(name).value)

    def toggle_lock(self, name: str) -> bool:
        """Flip the lock control and return the new manual flag."""
        if self.is_manual(name):
            self.unlock(name)
            return False
        self.lock(name)
        return True

    def reset(self) -> None:
        """Return every field to the default targets, all unlocked."""
        self._states = _default_states()

    def apply_calculated_values(self, calculated: Targets) -> list[str]:
        """Write calculated values into auto fields and return their names."""
        updated = []
        for name, state in self._states.items():
            if isinstance(state, Manual):
                continue
            value = getattr(calculated, name)
            if value != state.value:
                updated.append(name)
            self._states[name] = Auto(value)
        return updated

    def targets(self) -> Targets:
        """Return the current target values."""
        return Targets(**{name: state.value for name, state in self._states.items()})

    def flags(self) -> ManualOverrideFlags:
        """Return the lock flags for persistence."""
        return ManualOverrideFlags(
            **{
                name: isinstance(state, Manual)
                for name, state in self._states.items()
            }
        )


def _check_field(name: str) -> str:
    if name not in TARGET_FIELDS:
        raise KeyError(f"Unknown target field: {name}")
    return name
"""Editable calculator inputs and the activity table for one editor session."""

import logging
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from uuid import uuid4

from nutrition_calculator.domain.calculator import (
    CARBS_PER_KG_RANGE,
    DEFICIT_CALORIES_RANGE,
    DEFICIT_PERCENT_RANGE,
    FAT_PER_KG_RANGE,
    PAL_OPTIONS,
    PROTEIN_PER_KG_RANGE,
    ActivityEntry,
    CalculatorInputs,
    default_activity_entries,
)

_logger = logging.getLogger(__name__)

NEW_ENTRY_METS = 3.5

InputListener = Callable[[], None]
_ENTRY_FIELDS = {"activity_type", "mets", "minutes_per_week"}


class InvalidInputError(ValueError):
    """Raised for unknown input names or values outside an enumeration."""


def coerce_number(raw: object, *, allow_negative: bool = False) -> float:
    """Turn raw form text or numbers into a usable float.

    Empty, non-numeric and non-finite values become 0, as do negatives
    unless the field is signed.
    """
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return 0.0
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    if value < 0 and not allow_negative:
        return 0.0
    return value


def round_half_away(value: float) -> int:
    """Round to the nearest integer, with halves going away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _clamp(value: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return max(low, min(high, value))


def _measurement(raw: object) -> float:
    return coerce_number(raw)


def _signed_int(bounds: tuple[int, int]) -> Callable[[object], int]:
    def normalize(raw: object) -> int:
        value = coerce_number(raw, allow_negative=True)
        return round_half_away(_clamp(value, bounds))

    return normalize


def _ratio(bounds: tuple[float, float]) -> Callable[[object], float]:
    def normalize(raw: object) -> float:
        return _clamp(coerce_number(raw), bounds)

    return normalize


def _pal(raw: object) -> float:
    value = coerce_number(raw)
    return min(PAL_OPTIONS, key=lambda option: abs(option - value))


def _choice(*allowed: str) -> Callable[[object], str]:
    def normalize(raw: object) -> str:
        if raw not in allowed:
            raise InvalidInputError(f"Expected one of {allowed}, got {raw!r}")
        return str(raw)

    return normalize


_NORMALIZERS: dict[str, Callable[[object], object]] = {
    "weight": _measurement,
    "height": _measurement,
    "age": _measurement,
    "gender": _choice("male", "female"),
    "waist": _measurement,
    "hip": _measurement,
    "neck": _measurement,
    "pal": _pal,
    "caloric_deficit_mode": _choice("percent", "calories"),
    "caloric_deficit_percent": _signed_int(DEFICIT_PERCENT_RANGE),
    "caloric_deficit_calories": _signed_int(DEFICIT_CALORIES_RANGE),
    "protein_per_kg": _ratio(PROTEIN_PER_KG_RANGE),
    "fat_per_kg": _ratio(FAT_PER_KG_RANGE),
    "carbs_per_kg": _ratio(CARBS_PER_KG_RANGE),
}


def normalize_input(name: str, raw: object) -> object:
    """Coerce one raw input value into its domain value."""
    normalizer = _NORMALIZERS.get(name)
    if normalizer is None:
        raise InvalidInputError(f"Unknown calculator input: {name}")
    return normalizer(raw)


def apply_inputs(
    base: CalculatorInputs, values: Mapping[str, object]
) -> CalculatorInputs:
    """Return ``base`` with the given raw values normalized and applied."""
    if not values:
        return base
    changes = {name: normalize_input(name, raw) for name, raw in values.items()}
    return replace(base, **changes)


def normalize_entry(
    entry_id: str,
    activity_type: object = "",
    mets: object = 0,
    minutes_per_week: object = 0,
) -> ActivityEntry:
    """Build an activity row from raw form values."""
    return ActivityEntry(
        id=entry_id,
        activity_type=str(activity_type or ""),
        mets=coerce_number(mets),
        minutes_per_week=round_half_away(coerce_number(minutes_per_week)),
    )


@dataclass
class InputModel:
    """Single source of truth for calculator inputs and the activity table.

    Every mutation notifies subscribers so recalculation can be scheduled.
    """

    inputs: CalculatorInputs = field(default_factory=CalculatorInputs)
    entries: list[ActivityEntry] = field(default_factory=default_activity_entries)
    _listeners: list[InputListener] = field(default_factory=list)

    def subscribe(self, listener: InputListener) -> None:
        """Register a callback run after every mutation."""
        self._listeners.append(listener)

    def set_input(self, name: str, raw: object) -> None:
        """Update a single calculator input from raw form data."""
        self.update_inputs({name: raw})

    def update_inputs(self, values: Mapping[str, object]) -> None:
        """Update several inputs at once, notifying subscribers once."""
        self.inputs = apply_inputs(self.inputs, values)
        self._notify()

    def add_activity_entry(self) -> ActivityEntry:
        """Append a blank activity row and return it."""
        entry = ActivityEntry(
            id=uuid4().hex,
            activity_type="",
            mets=NEW_ENTRY_METS,
            minutes_per_week=0,
        )
        self.entries.append(entry)
        self._notify()
        return entry

    def update_activity_entry(self, entry_id: str, **updates: object) -> None:
        """Update fields of an activity row; unknown ids are ignored."""
        unknown = set(updates) - _ENTRY_FIELDS
        if unknown:
            raise InvalidInputError(f"Unknown activity fields: {sorted(unknown)}")
        for index, entry in enumerate(self.entries):
            if entry.id != entry_id:
                continue
            self.entries[index] = normalize_entry(
                entry.id,
                activity_type=updates.get("activity_type", entry.activity_type),
                mets=updates.get("mets", entry.mets),
                minutes_per_week=updates.get(
                    "minutes_per_week", entry.minutes_per_week
                ),
            )
            self._notify()
            return
        _logger.debug("Ignoring update for unknown activity entry %s", entry_id)

    def replace_activity_entries(self, entries: list[ActivityEntry]) -> None:
        """Swap in a whole activity table, e.g. when a form is resubmitted."""
        self.entries = list(entries)
        self._notify()

    def remove_activity_entry(self, entry_id: str) -> None:
        """Remove an activity row; unknown ids are ignored."""
        remaining = [entry for entry in self.entries if entry.id != entry_id]
        if len(remaining) == len(self.entries):
            return
        self.entries = remaining
        self._notify()

    def reset(self) -> None:
        """Restore default inputs and the starter activity table."""
        self.inputs = CalculatorInputs()
        self.entries = default_activity_entries()
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

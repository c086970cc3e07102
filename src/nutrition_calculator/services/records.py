"""Conversion between stored plan JSON and calculator domain objects."""

import logging
from collections.abc import Mapping
from dataclasses import asdict
from uuid import uuid4

from nutrition_calculator.domain.calculator import (
    DEFAULT_TARGETS,
    TARGET_FIELDS,
    ActivityEntry,
    CalculatorInputs,
    ManualOverrideFlags,
    Targets,
    default_activity_entries,
)
from nutrition_calculator.services.inputs import (
    InvalidInputError,
    coerce_number,
    normalize_entry,
    normalize_input,
)

_logger = logging.getLogger(__name__)

MANUAL_OVERRIDE_KEY = "_manual_override"
ACTIVITY_ENTRIES_KEY = "activityEntries"

_RECORD_KEYS = {
    "weight": "weight",
    "height": "height",
    "age": "age",
    "gender": "gender",
    "waist": "waist",
    "hip": "hip",
    "neck": "neck",
    "pal": "pal",
    "caloric_deficit_mode": "caloricDeficitMode",
    "caloric_deficit_percent": "caloricDeficitPercent",
    "caloric_deficit_calories": "caloricDeficitCalories",
    "protein_per_kg": "proteinPerKg",
    "fat_per_kg": "fatPerKg",
    "carbs_per_kg": "carbsPerKg",
}
_FIELD_NAMES = {key: name for name, key in _RECORD_KEYS.items()}


def input_name(key: str) -> str:
    """Map a stored camelCase key (or a field name) to the input field name."""
    if key in _RECORD_KEYS:
        return key
    name = _FIELD_NAMES.get(key)
    if name is None:
        raise InvalidInputError(f"Unknown calculator input: {key}")
    return name


def inputs_from_record(
    raw: Mapping[str, object] | None,
) -> tuple[CalculatorInputs, list[ActivityEntry]]:
    """Load calculator inputs and the activity table from a plan snapshot.

    Missing keys fall back to the defaults. Values that cannot be used are
    logged and skipped rather than failing the whole load.
    """
    if not raw:
        return CalculatorInputs(), default_activity_entries()

    changes: dict[str, object] = {}
    for key, value in raw.items():
        if key == ACTIVITY_ENTRIES_KEY:
            continue
        try:
            name = input_name(key)
            changes[name] = normalize_input(name, value)
        except InvalidInputError as exc:
            _logger.warning("Skipping stored calculator input %s: %s", key, exc)
    inputs = CalculatorInputs(**changes)  # type: ignore[arg-type]

    raw_entries = raw.get(ACTIVITY_ENTRIES_KEY)
    if not isinstance(raw_entries, list):
        return inputs, default_activity_entries()
    return inputs, entries_from_record(raw_entries)


def entries_from_record(raw_entries: list[object]) -> list[ActivityEntry]:
    """Load activity rows, tolerating string numbers and missing ids."""
    entries = []
    for raw_entry in raw_entries:
        if not isinstance(raw_entry, Mapping):
            _logger.warning("Skipping malformed activity entry: %r", raw_entry)
            continue
        entry_id = raw_entry.get("id")
        entries.append(
            normalize_entry(
                str(entry_id) if entry_id else uuid4().hex,
                activity_type=raw_entry.get("activityType", ""),
                mets=raw_entry.get("mets"),
                minutes_per_week=raw_entry.get("minutesPerWeek"),
            )
        )
    return entries


def inputs_to_record(
    inputs: CalculatorInputs, entries: list[ActivityEntry]
) -> dict[str, object]:
    """Serialize inputs and the activity table into the plan snapshot."""
    record: dict[str, object] = {
        _RECORD_KEYS[name]: value for name, value in asdict(inputs).items()
    }
    record[ACTIVITY_ENTRIES_KEY] = [
        {
            "id": entry.id,
            "activityType": entry.activity_type,
            "mets": entry.mets,
            "minutesPerWeek": entry.minutes_per_week,
        }
        for entry in entries
    ]
    return record


def targets_from_record(
    raw: Mapping[str, object] | None,
) -> tuple[Targets, ManualOverrideFlags]:
    """Load targets and their lock flags from the plan targets JSON."""
    if not raw:
        return DEFAULT_TARGETS, ManualOverrideFlags()
    values = {
        name: (
            coerce_number(raw[name])
            if name in raw
            else getattr(DEFAULT_TARGETS, name)
        )
        for name in TARGET_FIELDS
    }
    raw_flags = raw.get(MANUAL_OVERRIDE_KEY)
    flags = ManualOverrideFlags()
    if isinstance(raw_flags, Mapping):
        flags = ManualOverrideFlags(
            **{name: bool(raw_flags.get(name, False)) for name in TARGET_FIELDS}
        )
    return Targets(**values), flags


def targets_to_record(
    targets: Targets, flags: ManualOverrideFlags
) -> dict[str, object]:
    """Serialize targets with lock flags embedded for reload."""
    record: dict[str, object] = dict(asdict(targets))
    record[MANUAL_OVERRIDE_KEY] = asdict(flags)
    return record

"""Per-field override states for calculator targets."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Auto:
    """Target value owned by the calculator; recompute may replace it."""

    value: float


@dataclass(frozen=True)
class Manual:
    """Target value pinned by the coach; recompute must pass it through."""

    value: float


FieldState = Auto | Manual

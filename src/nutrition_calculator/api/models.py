"""Pydantic models for calculator API payloads."""

from pydantic import BaseModel, Field


class CalculatorPreviewRequest(BaseModel):
    """Inputs for a one-off calculation that is not persisted."""

    calculator_inputs: dict[str, object] = Field(default_factory=dict)
    activity_entries: list[dict[str, object]] | None = None
    targets: dict[str, object] | None = None


class CalculatorUpdateRequest(BaseModel):
    """Edits applied to a stored plan before recalculating and saving."""

    calculator_inputs: dict[str, object] = Field(default_factory=dict)
    activity_entries: list[dict[str, object]] | None = None
    manual_targets: dict[str, float] = Field(default_factory=dict)
    locks: dict[str, bool] = Field(default_factory=dict)

"""FastAPI application factory."""

import logging
from dataclasses import asdict
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status

from nutrition_calculator.api.models import (
    CalculatorPreviewRequest,
    CalculatorUpdateRequest,
)
from nutrition_calculator.app_logging import configure_logging
from nutrition_calculator.containers import AppContainer
from nutrition_calculator.services.editor import NutritionEditorSession
from nutrition_calculator.services.inputs import InvalidInputError
from nutrition_calculator.services.plans import PlanNotFoundError
from nutrition_calculator.services.recalculation import AsyncioClock


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(debug=container.settings.debug)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/calculator/preview")
    async def calculator_preview(body: CalculatorPreviewRequest) -> dict[str, object]:
        """Run the calculator on the given inputs without saving anything."""
        session = NutritionEditorSession.from_records(
            body.targets, None, clock=AsyncioClock()
        )
        try:
            session.update_inputs(body.calculator_inputs)
            if body.activity_entries is not None:
                session.replace_activity_entries(list(body.activity_entries))
        except InvalidInputError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        session.recalculate_now()
        return _calculator_view(session)

    @app.get("/plans/{plan_id}/calculator")
    async def plan_calculator(plan_id: UUID, request: Request) -> dict[str, object]:
        """Return the stored calculator state of a plan with derived values."""
        state_container: AppContainer = request.app.state.container
        try:
            session = state_container.plan_service.open_editor(
                plan_id, clock=AsyncioClock()
            )
        except PlanNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
        return _calculator_view(session)

    @app.put("/plans/{plan_id}/calculator")
    async def update_plan_calculator(
        plan_id: UUID, body: CalculatorUpdateRequest, request: Request
    ) -> dict[str, object]:
        """Apply edits, recalculate unlocked targets and save the plan."""
        state_container: AppContainer = request.app.state.container
        plan_service = state_container.plan_service
        try:
            session = plan_service.open_editor(plan_id, clock=AsyncioClock())
        except PlanNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
        try:
            _apply_update(session, body)
        except (InvalidInputError, KeyError) as exc:
            session.scheduler.cancel()
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        session.recalculate_now()
        try:
            payload = plan_service.save(plan_id, session)
        except RuntimeError as exc:
            logger.exception("Failed to save nutrition plan %s", plan_id)
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY) from exc
        return {"plan_id": str(plan_id), **payload}

    return app


def _apply_update(
    session: NutritionEditorSession, body: CalculatorUpdateRequest
) -> None:
    if body.calculator_inputs:
        session.update_inputs(body.calculator_inputs)
    if body.activity_entries is not None:
        session.replace_activity_entries(list(body.activity_entries))
    for name, value in body.manual_targets.items():
        session.set_target(name, value)
    for name, locked in body.locks.items():
        if locked:
            session.lock(name)
        else:
            session.unlock(name)


def _calculator_view(session: NutritionEditorSession) -> dict[str, object]:
    breakdown = session.breakdown()
    energy = breakdown.energy
    return {
        "body_composition": asdict(breakdown.body_composition),
        "bmr": asdict(energy.bmr.rounded()),
        "exercise_ee": round(energy.exercise_ee),
        "tdee": energy.rounded_tdee,
        "calculated": asdict(breakdown.macros),
        "targets": asdict(session.targets),
        "manual_override": asdict(session.flags),
        "macro_percentages": asdict(session.macro_percentages()),
    }

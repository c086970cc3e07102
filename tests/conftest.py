"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import UUID, uuid4

import pytest

from nutrition_calculator.config import Settings
from nutrition_calculator.containers import AppContainer
from nutrition_calculator.domain.plans import NutritionPlanRecord
from nutrition_calculator.services.plans import (
    NutritionPlanRepository,
    NutritionPlanService,
)
from nutrition_calculator.services.recalculation import Clock

# JWT-shaped so client construction accepts it; never sent anywhere.
FAKE_SERVICE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
    "c2lnbmF0dXJl"
)


@dataclass
class VirtualTimer:
    """Timer handle owned by the virtual clock."""

    due: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class VirtualClock(Clock):
    """Manually advanced clock for debounce tests."""

    now: float = 0.0
    timers: list[VirtualTimer] = field(default_factory=list)

    def call_later(
        self, delay_seconds: float, callback: Callable[[], None]
    ) -> VirtualTimer:
        timer = VirtualTimer(due=self.now + delay_seconds, callback=callback)
        self.timers.append(timer)
        return timer

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [
                timer
                for timer in self.timers
                if not timer.cancelled and timer.due <= target + 1e-9
            ]
            if not due:
                break
            timer = min(due, key=lambda item: item.due)
            self.timers.remove(timer)
            self.now = timer.due
            timer.callback()
        self.now = target

    @property
    def active(self) -> list[VirtualTimer]:
        return [timer for timer in self.timers if not timer.cancelled]


@dataclass
class InMemoryNutritionPlanRepository(NutritionPlanRepository):
    """In-memory nutrition plan repository for tests."""

    plans: dict[UUID, NutritionPlanRecord] = field(default_factory=dict)
    saves: list[UUID] = field(default_factory=list)

    def add_plan(
        self,
        targets: dict[str, object] | None = None,
        calculator_inputs: dict[str, object] | None = None,
    ) -> NutritionPlanRecord:
        plan = NutritionPlanRecord(
            id=uuid4(),
            targets=targets or {},
            calculator_inputs=calculator_inputs,
        )
        self.plans[plan.id] = plan
        return plan

    def get_plan(self, plan_id: UUID) -> NutritionPlanRecord | None:
        return self.plans.get(plan_id)

    def save_calculator_state(
        self,
        plan_id: UUID,
        targets: dict[str, object],
        calculator_inputs: dict[str, object],
    ) -> NutritionPlanRecord:
        plan = NutritionPlanRecord(
            id=plan_id, targets=targets, calculator_inputs=calculator_inputs
        )
        self.plans[plan_id] = plan
        self.saves.append(plan_id)
        return plan


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=FAKE_SERVICE_KEY,
    )


@pytest.fixture
def clock() -> VirtualClock:
    return VirtualClock()


@pytest.fixture
def plan_repository() -> InMemoryNutritionPlanRepository:
    return InMemoryNutritionPlanRepository()


@pytest.fixture
def container(
    settings: Settings, plan_repository: InMemoryNutritionPlanRepository
) -> AppContainer:
    return AppContainer(
        settings=settings,
        plan_service=NutritionPlanService(
            repository=plan_repository,
            delay_seconds=settings.recalculation_delay_seconds,
        ),
    )

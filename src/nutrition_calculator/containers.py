"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutrition_calculator.adapters.supabase_nutrition_plan_repository import (
    SupabaseNutritionPlanRepository,
)
from nutrition_calculator.config import Settings
from nutrition_calculator.services.plans import NutritionPlanService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    plan_service: NutritionPlanService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    plan_repository = SupabaseNutritionPlanRepository(
        supabase_client, table_name=resolved_settings.nutrition_plans_table
    )
    plan_service = NutritionPlanService(
        repository=plan_repository,
        delay_seconds=resolved_settings.recalculation_delay_seconds,
    )
    return AppContainer(settings=resolved_settings, plan_service=plan_service)

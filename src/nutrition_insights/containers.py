"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import create_client

from nutrition_insights.adapters.local_model_client import HttpxLocalModelClient
from nutrition_insights.adapters.openai_language_model import OpenAILanguageModel
from nutrition_insights.adapters.supabase_key_value_store import SupabaseKeyValueStore
from nutrition_insights.adapters.supabase_nutrition_log_repository import (
    SupabaseNutritionLogRepository,
)
from nutrition_insights.adapters.unavailable_language_model import (
    UnavailableLanguageModel,
)
from nutrition_insights.app_logging import configure_logging
from nutrition_insights.config import Settings, resolve_model_provider
from nutrition_insights.services.collector import WeeklyDataCollector
from nutrition_insights.services.generation import (
    InsightGenerationService,
    InsightGenerator,
    LanguageModel,
)
from nutrition_insights.services.insights import WeeklyInsightsService
from nutrition_insights.services.session import InsightSession


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    language_model: LanguageModel
    session: InsightSession
    insights_service: WeeklyInsightsService
    generation_service: InsightGenerationService
    close_resources: Callable[[], Awaitable[None]]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def build_container(
    settings: Settings | None = None,
    clock: Callable[[], datetime] = _utc_now,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level.upper())
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_id = resolved_settings.insights_user_id
    repository = SupabaseNutritionLogRepository(supabase_client, user_id)
    store = SupabaseKeyValueStore(supabase_client, user_id)

    local_client: HttpxLocalModelClient | None = None
    openai_model: OpenAILanguageModel | None = None
    language_model: LanguageModel
    provider = resolve_model_provider(resolved_settings.llm_provider)
    if provider == "local":
        local_client = HttpxLocalModelClient.create(resolved_settings.local_model_url)
        language_model = local_client
    elif provider == "openai" and resolved_settings.openai_api_key:
        openai_model = OpenAILanguageModel.create(
            resolved_settings.openai_api_key, resolved_settings.openai_model
        )
        language_model = openai_model
    else:
        language_model = UnavailableLanguageModel()

    session = InsightSession(
        store, clock, cache_valid_days=resolved_settings.cache_valid_days
    )
    collector = WeeklyDataCollector(
        repository=repository,
        clock=clock,
        calorie_target=resolved_settings.default_calorie_target,
        protein_target=resolved_settings.default_protein_target,
        glass_size_ml=resolved_settings.glass_size_ml,
        water_goal_glasses=resolved_settings.water_goal_glasses,
    )
    insights_service = WeeklyInsightsService(
        collector=collector,
        session=session,
        model=language_model,
        max_questions=resolved_settings.max_selected_questions,
    )
    generation_service = InsightGenerationService(
        generator=InsightGenerator(
            model=language_model,
            clock=clock,
            max_tokens=resolved_settings.llm_max_tokens,
        ),
        session=session,
    )

    async def close_resources() -> None:
        if local_client is not None:
            await local_client.close()
        if openai_model is not None:
            await openai_model.close()

    return AppContainer(
        settings=resolved_settings,
        language_model=language_model,
        session=session,
        insights_service=insights_service,
        generation_service=generation_service,
        close_resources=close_resources,
    )

"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

MODEL_PROVIDERS = {"local", "openai", "none"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    insights_user_id: str
    llm_provider: str = "local"
    local_model_url: str = "http://127.0.0.1:8080"
    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    llm_max_tokens: int = 150
    default_calorie_target: int = 2000
    default_protein_target: int = 150
    water_goal_glasses: int = 8
    glass_size_ml: int = 250
    max_selected_questions: int = 6
    cache_valid_days: int = 7
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def water_target_ml(self) -> int:
        """Daily water target in millilitres."""
        return self.water_goal_glasses * self.glass_size_ml


def resolve_model_provider(raw: str | None) -> str:
    """Normalise the configured model provider name."""
    if raw is None:
        return "none"
    cleaned = raw.strip().lower()
    if cleaned in MODEL_PROVIDERS:
        return cleaned
    return "none"

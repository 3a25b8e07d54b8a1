from __future__ import annotations

from app.core.llm.anthropic_client import AnthropicClient, AnthropicConfig, CompletionClient
from app.core.llm.retry import RetryingCompletionClient
from app.core.settings import get_settings
from app.recommendations.service import RecommendationService


def get_recommendation_service() -> RecommendationService:
    """
    Dependency provider for RecommendationService.

    Tests replace this provider through `app.dependency_overrides` instead of relying on a
    module-level instance. Without an API key the returned service is unconfigured and
    answers with a fixed text rather than failing dependency resolution.
    """

    settings = get_settings()
    # An empty env var means "not set", not "explicitly empty".
    api_key = settings.anthropic_api_key or None
    if api_key is None:
        return RecommendationService(model=settings.anthropic_model)

    llm_client: CompletionClient = AnthropicClient(
        config=AnthropicConfig(
            api_key=api_key,
            model=settings.anthropic_model,
            base_url=settings.anthropic_base_url,
            api_version=settings.anthropic_version,
            timeout_seconds=float(settings.anthropic_timeout_seconds),
        )
    )
    if settings.anthropic_max_retries > 0:
        llm_client = RetryingCompletionClient(
            inner=llm_client, max_retries=settings.anthropic_max_retries
        )
    return RecommendationService(api_key, settings.anthropic_model, llm_client=llm_client)

from __future__ import annotations

from app.core.llm.anthropic_client import (
    AnthropicClient,
    AnthropicConfig,
    AnthropicError,
    CompletionClient,
)
from app.domain.exceptions import ConfigurationError
from app.recommendations.errors import classify_error
from app.recommendations.prompt import build_recommendation_prompt
from app.recommendations.schemas import Conditions, LawnProfile
from app.recommendations.validation import check_value_ranges

DEFAULT_MODEL = "claude-3-sonnet-20240229"
NOT_CONFIGURED_MESSAGE = "AI recommendations not available - API key not configured"


class RecommendationService:
    """
    Generate lawn-care recommendations through a completion client.

    Construction rules:
    - `api_key=""` is a configuration error.
    - `api_key=None` is allowed; the service is then "unconfigured" and answers with a
      fixed text instead of calling the model.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        *,
        llm_client: CompletionClient | None = None,
    ):
        if api_key is not None and not api_key:
            raise ConfigurationError("API key is required")

        self._api_key = api_key
        self._model = model
        if llm_client is None and api_key:
            llm_client = AnthropicClient(config=AnthropicConfig(api_key=api_key, model=model))
        self._llm = llm_client

    @property
    def is_configured(self) -> bool:
        return self._api_key is not None

    @property
    def model(self) -> str:
        return self._model

    async def generate_recommendation(self, profile: LawnProfile, conditions: Conditions) -> str:
        if not self.is_configured or self._llm is None:
            return NOT_CONFIGURED_MESSAGE

        check_value_ranges(profile, conditions)
        prompt = build_recommendation_prompt(profile=profile, conditions=conditions)

        try:
            return await self._llm.create_message(prompt=prompt)
        except AnthropicError as exc:
            raise classify_error(exc) from exc

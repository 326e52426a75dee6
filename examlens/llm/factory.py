"""Model factory for creating the evaluator model."""

from __future__ import annotations

from langchain_core.language_models import BaseChatModel

from .config import LLMSecrets, LLMSettings, ModelSettings
from .provider import create_chat_model, ModelConfig


class ModelFactory:
    """Factory for creating configured LLM instances."""

    def __init__(self, settings: LLMSettings, secrets: LLMSecrets) -> None:
        self._settings = settings
        self._secrets = secrets

    def _get_api_key(self) -> str:
        if self._secrets.api_key is None:
            raise ValueError("OpenRouter API key not configured")
        return self._secrets.api_key.get_secret_value()

    def _model_settings_to_config(self, settings: ModelSettings) -> ModelConfig:
        return ModelConfig(
            model_name=settings.model,
            base_url=settings.base_url,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            timeout=settings.timeout_seconds,
            max_retries=settings.max_retries,
        )

    def create_model(self, settings: ModelSettings) -> BaseChatModel:
        """Create a chat model from settings."""
        return create_chat_model(self._model_settings_to_config(settings), api_key=self._get_api_key())

    def create_evaluation_model(self) -> BaseChatModel:
        """Create the model for question evaluation."""
        return self.create_model(self._settings.evaluation)

    @property
    def evaluation_settings(self) -> ModelSettings:
        """Get evaluation model settings."""
        return self._settings.evaluation

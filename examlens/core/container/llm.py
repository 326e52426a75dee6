"""LLM container for dependency injection."""

from __future__ import annotations

from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Configuration, Provider, Singleton

from examlens.llm import LLMSecrets, LLMSettings, ModelFactory


class LLMContainer(DeclarativeContainer):
    """Container for LLM services."""

    config: Configuration = Configuration()
    secrets: Configuration = Configuration()

    settings: Provider[LLMSettings] = Singleton(LLMSettings.model_validate, config)
    llm_secrets: Provider[LLMSecrets] = Singleton(LLMSecrets.model_validate, secrets)

    model_factory: Provider[ModelFactory] = Singleton(ModelFactory, settings=settings, secrets=llm_secrets)

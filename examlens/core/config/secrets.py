from __future__ import annotations

import pydantic as p
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from examlens.llm.config import LLMSecrets
from examlens.model import BaseModel, DeploymentEnvironment

from .base import BaseSecrets


class Secrets(BaseSecrets, BaseModel):  # pyright: ignore [reportIncompatibleVariableOverride]
    """Process secrets, sourced from the environment."""

    env: DeploymentEnvironment

    llm: LLMSecrets = p.Field(default_factory=LLMSecrets)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # nested secrets read their own variables when defaulted
        return (init_settings,)

"""LLM configuration settings."""

from __future__ import annotations

import pydantic as p
import pydantic_settings as ps

from examlens.model import MismatchPolicy

from .provider import OpenRouterBaseURL


class ModelSettings(ps.BaseSettings):
    """Settings for the evaluator model."""

    model: str = "mistralai/mistral-7b-instruct"
    base_url: str = OpenRouterBaseURL
    max_tokens: int = 2000
    temperature: float = 0.3
    # the pipeline makes exactly one attempt per request
    max_retries: int = 0
    timeout_seconds: float = 60.0


class LLMSettings(ps.BaseSettings):
    """Root LLM configuration."""

    evaluation: ModelSettings = ModelSettings()


class EvaluationSettings(ps.BaseSettings):
    """Question evaluation pipeline behavior."""

    count_mismatch: MismatchPolicy = MismatchPolicy.Truncate
    # upper bound on how much of an unparseable response gets logged
    log_candidate_chars: int = 2000


class LLMSecrets(ps.BaseSettings):
    """LLM API secrets, read from OPENROUTER_API_KEY."""

    model_config = ps.SettingsConfigDict(env_prefix="OPENROUTER_")

    api_key: p.SecretStr | None = None

"""Pytest fixtures for examlens tests.

The evaluator model is always stubbed: tests never reach OpenRouter. The
`container` fixture boots the real DI container against the repository's
`config/` directory in the Test environment, so settings, templates and the
app factory are exercised as they are in production.

Usage:
    def test_analyze(client: TestClient, evaluator_model: MagicMock):
        response = client.post("/api/analyze", json={...})
        assert response.status_code == 200
"""

from __future__ import annotations

import copy
import json
import os
import typing as t
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import jinja2
import pydantic as p
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

import examlens
from examlens.core import ExamlensContainer
from examlens.core.container import TemplateContainer
from examlens.llm import ModelFactory
from examlens.llm.evaluation import EvaluationPipeline
from examlens.model import DeploymentEnvironment

ROOT = Path(__file__).resolve().parents[1]
PACKAGE_ROOT = Path(os.path.dirname(examlens.__file__)).parent

SampleQuestions = "What is 2+2?\n\nExplain photosynthesis."

SampleEvaluations: list[dict[str, t.Any]] = [
    {
        "question": "What is 2+2?",
        "bloom": "Remember",
        "higherOrder": False,
        "clarityScore": 95,
        "grammarScore": 100,
        "spellingScore": 100,
        "overallScore": 80,
        "suggestions": ["Add context", "Ask for the method"],
    },
    {
        "question": "Explain photosynthesis.",
        "bloom": "Understand",
        "higherOrder": True,
        "clarityScore": 85,
        "grammarScore": 90,
        "spellingScore": 95,
        "overallScore": 60,
        "suggestions": ["Narrow the scope", "Name the inputs"],
    },
]


def fenced(evaluations: t.Any) -> str:
    """Render evaluations the way a chatty model tends to return them."""
    return f"Here is the evaluation:\n```json\n{json.dumps(evaluations, indent=2)}\n```"


@pytest.fixture
def sample_evaluations() -> list[dict[str, t.Any]]:
    return copy.deepcopy(SampleEvaluations)


@pytest.fixture
def payload() -> dict[str, t.Any]:
    """A valid submission carrying the two sample questions."""
    return {
        "outcomes": "CO1: recall arithmetic facts",
        "syllabus": "Unit 1: arithmetic. Unit 2: biology.",
        "set1": SampleQuestions,
    }


@pytest.fixture
def respond_with(evaluator_model: MagicMock) -> t.Callable[[str], None]:
    """Set the raw text the stubbed evaluator answers with."""

    def _respond(content: str) -> None:
        evaluator_model.ainvoke.return_value = AIMessage(content=content)

    return _respond


@pytest.fixture
def respond_with_evaluations(respond_with: t.Callable[[str], None]) -> t.Callable[[t.Any], None]:
    """Make the stubbed evaluator answer with fenced JSON for `evaluations`."""

    def _respond(evaluations: t.Any) -> None:
        respond_with(fenced(evaluations))

    return _respond


@pytest.fixture(scope="session")
def container() -> t.Generator[ExamlensContainer]:
    """Boot the DI container for the test session.

    Uses the Test environment, which picks up `config/env.d/test/` on top of
    the base configuration.
    """
    ct = ExamlensContainer()

    ExamlensContainer.boot(
        ct,
        debug=True,
        env=DeploymentEnvironment.Test,
        config_root=p.FileUrl(f"file://{ROOT}/config"),
        override=(),
    )

    yield ct

    ct.shutdown_resources()


@pytest.fixture(scope="session")
def llm_env() -> jinja2.Environment:
    """Prompt template environment, built the way the container builds it."""
    return TemplateContainer.provide_llm_env("examlens/template/llm", root_path=PACKAGE_ROOT)


@pytest.fixture
def evaluator_model() -> MagicMock:
    """Chat model stub answering with the two sample evaluations."""
    model = MagicMock()
    model.ainvoke = AsyncMock(return_value=AIMessage(content=fenced(SampleEvaluations)))
    return model


@pytest.fixture
def model_factory(evaluator_model: MagicMock) -> MagicMock:
    factory = MagicMock(spec=ModelFactory)
    factory.create_evaluation_model.return_value = evaluator_model
    return factory


@pytest.fixture
def pipeline(model_factory: MagicMock, llm_env: jinja2.Environment) -> EvaluationPipeline:
    return EvaluationPipeline(model_factory, llm_env)


@pytest.fixture(scope="session")
def app(container: ExamlensContainer) -> FastAPI:
    """Create the analyzer application from the booted container."""
    from examlens.core.config import AnalyzerWebSettings
    from examlens.web.analyzer.main import _create_app  # pyright: ignore[reportPrivateUsage]

    container.wire(
        modules=[
            "examlens.web.analyzer.main",
            "examlens.web.analyzer.route.analyze",
        ]
    )

    return _create_app(
        config=AnalyzerWebSettings(**container.config.web.analyzer()),
        env=DeploymentEnvironment.Test,
    )


@pytest.fixture
def client(
    app: FastAPI, container: ExamlensContainer, pipeline: EvaluationPipeline
) -> t.Generator[TestClient]:
    """Test client whose requests are served by the stubbed pipeline."""
    container.pipeline.override(pipeline)
    try:
        with TestClient(app) as c:
            yield c
    finally:
        container.pipeline.reset_override()

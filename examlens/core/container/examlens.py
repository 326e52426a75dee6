from __future__ import annotations

import os
import sys
import types
import typing as t
from pathlib import Path

import pydantic as p
from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Configuration, Container, Object, Provider, Resource, Singleton

import examlens
from examlens.llm.config import EvaluationSettings
from examlens.llm.evaluation import EvaluationPipeline
from examlens.model import BaseModel, DeploymentEnvironment

from ..config import Secrets, Settings
from ..di import NotReady
from ..provider import LoggingProvider
from .llm import LLMContainer
from .template import TemplateContainer


# carries the BootConfiguration from the CLI into uvicorn worker processes
BootEnvironmentVariable: t.Final[str] = "__Examlens_BOOT"


class BootConfiguration(BaseModel):
    debug: bool
    env: DeploymentEnvironment
    config_root: p.FileUrl
    override: tuple[str, ...]


class ExamlensContainer(DeclarativeContainer):
    config: Configuration = Configuration()
    secrets: Configuration = Configuration()

    debug: Provider[bool] = Singleton(bool)
    env: Provider[DeploymentEnvironment] = Singleton(DeploymentEnvironment)
    root: Object[NotReady | Path] = Object(NotReady())

    logging: Provider[LoggingProvider] = Resource(LoggingProvider, config=config.logging, debug=debug)
    template: Provider[TemplateContainer] = Container(TemplateContainer, config=config.template, root=root)
    llm: Provider[LLMContainer] = Container(LLMContainer, config=config.llm, secrets=secrets.llm)

    pipeline: Provider[EvaluationPipeline] = Singleton(
        EvaluationPipeline,
        model_factory=llm.model_factory,
        env=template.llm,
        settings=Singleton(EvaluationSettings.model_validate, config.evaluation),
    )

    _boot_config: Provider[BootConfiguration | NotReady] = Object(NotReady())

    @staticmethod
    def boot(
        ct: ExamlensContainer,
        /,
        debug: bool,
        env: DeploymentEnvironment,
        config_root: p.FileUrl,
        override: tuple[str, ...] | None = None,
        wiring: tuple[str | types.ModuleType, ...] | None = None,
    ):
        if config_root.scheme != "file":
            raise ValueError(f"unsupported scheme for config root: {config_root.scheme}")
        ps = Settings(env=env, root=config_root, override=override or ())
        ct.config.from_pydantic(ps)
        if wiring:
            ct.wire(modules=wiring)
        if imported := [mod for name, mod in sys.modules.items() if name.startswith("examlens.")]:
            ct.wire(modules=imported)

        logger = ct.logging().get_logger()

        for ov in ps.override:
            k, v = ov.split("=", 1)
            logger.info(
                "overriding configuration parameter",
                extra={
                    "key": k,
                    "value": v,
                },
            )

        ct.debug.override(debug)
        ct.env.override(env)
        ct.root.override(Path(os.path.dirname(examlens.__file__)).parent)
        if debug:
            ct.logging().capture_warnings(True)

        secrets = Secrets(env=env)
        ct.secrets.from_pydantic(secrets)
        if secrets.llm.api_key is None:
            logger.warning("OPENROUTER_API_KEY is not set; evaluation requests will fail")

        logger.debug(
            "configuration finished",
            extra={
                "config": str(config_root),
                "env": env.value,
            },
        )
        ct._boot_config.override(
            BootConfiguration(debug=debug, env=env, config_root=config_root, override=override or ())
        )

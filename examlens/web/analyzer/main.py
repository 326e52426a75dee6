"""Main entry point for the question analyzer web application."""

import logging
import os

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware

import examlens
from examlens.core import BootConfiguration, BootEnvironmentVariable, di, ExamlensContainer
from examlens.core.config import AnalyzerWebSettings
from examlens.lib.json import FastAPIJSONResponse
from examlens.llm.evaluation import EvaluationError, EvaluatorUnavailableError, InputValidationError, \
    ResponseParseError
from examlens.model import DeploymentEnvironment

from .route import router
from .view import ErrorResponse

logger = logging.getLogger(__name__)

# most specific class wins; anything else is a 500
ErrorStatus: dict[type[EvaluationError], int] = {
    InputValidationError: status.HTTP_400_BAD_REQUEST,
    EvaluatorUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    ResponseParseError: status.HTTP_502_BAD_GATEWAY,
}


def status_for(error: EvaluationError) -> int:
    for cls in type(error).__mro__:
        if cls in ErrorStatus:
            return ErrorStatus[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def evaluation_error_handler(request: Request, exc: Exception) -> FastAPIJSONResponse:
    if not isinstance(exc, EvaluationError):
        raise exc
    status_code = status_for(exc)
    logger.info(
        "analysis failed",
        extra={"error": type(exc).__name__, "status_code": status_code, "detail": str(exc)},
    )
    return FastAPIJSONResponse(ErrorResponse(error=exc.message, retryable=exc.retryable), status_code=status_code)


@di.inject
def _create_app(
    config: AnalyzerWebSettings = di.Provide["config.web.analyzer", di.as_(AnalyzerWebSettings)],
    env: DeploymentEnvironment = di.Provide["env"],
) -> FastAPI:
    app = FastAPI(
        title="examlens",
        description="Exam question quality analysis",
        version=examlens.__version__,
    )

    if env is DeploymentEnvironment.Local and config.frontend is not None:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[
                f"http://{config.frontend.host}:{config.frontend.port}",
                f"http://localhost:{config.frontend.port}",
            ],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(EvaluationError, evaluation_error_handler)
    app.include_router(router)
    return app


def create_app() -> FastAPI:
    """Factory function for uvicorn."""
    boot_vars = os.getenv(BootEnvironmentVariable)
    if boot_vars:
        boot_cf = BootConfiguration.model_validate_json(boot_vars)
        ct = ExamlensContainer()
        ExamlensContainer.boot(ct, **dict(boot_cf))
        ct.wire(modules=["examlens.web.analyzer.main", "examlens.web.analyzer.route.analyze"])
        return _create_app(
            config=AnalyzerWebSettings(**ct.config.web.analyzer()),
            env=boot_cf.env,
        )
    return _create_app()

"""Question analysis routes."""

from fastapi import APIRouter, Depends, Request, status

from examlens.core import di
from examlens.llm.evaluation import EvaluationPipeline, InputValidationError
from examlens.model import EvaluationReport
from examlens.web.analyzer.view import AnalyzeRequest, ErrorResponse

router = APIRouter(prefix="/api", tags=["analysis"])


@router.post(
    "/analyze",
    operation_id="analyze_questions",
    response_model=EvaluationReport,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
        status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": AnalyzeRequest.model_json_schema()}},
        },
    },
)
@di.inject
async def analyze_route(
    request: Request,
    pipeline: EvaluationPipeline = Depends(di.Provide["pipeline"]),
) -> EvaluationReport:
    """Evaluate a batch of exam questions.

    Errors are reported as `{"error": ..., "retryable": ...}` by the app's
    evaluation error handler.
    """
    try:
        payload = await request.json()
    except ValueError as e:
        raise InputValidationError("request body is not valid JSON") from e
    return await pipeline.evaluate(payload)

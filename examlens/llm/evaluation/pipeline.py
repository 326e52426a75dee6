"""Question evaluation pipeline orchestrator."""

from __future__ import annotations

import logging
import typing as t

import jinja2
import pydantic as p

from examlens.llm.config import EvaluationSettings
from examlens.llm.factory import ModelFactory
from examlens.llm.provider import content_to_str, TokenTracker
from examlens.model import EvaluationReport, MismatchPolicy, QuestionEvaluation, Submission

from .aggregate import aggregate
from .errors import EvaluationCountMismatchError, EvaluationError, EvaluationFailedError, \
    EvaluatorUnavailableError, InputValidationError, ResponseParseError
from .extract import extract_json_array
from .parse import parse_evaluations, ParseFailure
from .prompt import build_prompt, Prompt
from .questions import sanitize, segment_questions

logger = logging.getLogger(__name__)

Extractor = t.Callable[[str], str]


class EvaluationPipeline:
    """Evaluates one batch of exam questions.

    The pipeline:
    1. Validates the submission
    2. Sanitizes and segments the question block
    3. Builds the rubric prompt and makes a single evaluator call
    4. Extracts and parses the JSON array from the response
    5. Reconciles the evaluation count with the question count
    6. Aggregates the evaluations into a report

    Any failure surfaces as an `EvaluationError`; a report is either complete
    or not returned at all.
    """

    def __init__(
        self,
        model_factory: ModelFactory,
        env: jinja2.Environment,
        settings: EvaluationSettings | None = None,
        extractor: Extractor = extract_json_array,
    ) -> None:
        """Initialize the pipeline.

        Args:
            model_factory: Factory for creating the evaluator model
            env: Jinja2 environment for prompt templates
            settings: Pipeline behavior settings
            extractor: Strategy for isolating the JSON array in raw model output
        """
        self._model_factory = model_factory
        self._env = env
        self._settings = settings or EvaluationSettings()
        self._extractor = extractor

    async def evaluate(self, payload: t.Any) -> EvaluationReport:
        """Run the full evaluation pipeline over a raw submission payload.

        Args:
            payload: Mapping with `outcomes`, `syllabus` and `set1` text fields

        Returns:
            EvaluationReport for the submitted questions

        Raises:
            EvaluationError: one of its subclasses, per failure kind
        """
        try:
            return await self._evaluate(payload)
        except EvaluationError:
            raise
        except Exception as e:
            logger.exception("evaluation failed")
            raise EvaluationFailedError(str(e)) from e

    async def _evaluate(self, payload: t.Any) -> EvaluationReport:
        try:
            submission = Submission.from_payload(payload)
        except p.ValidationError as e:
            logger.info("rejected submission", extra={"errors": e.errors(include_url=False, include_input=False)})
            raise InputValidationError(str(e)) from e

        questions = segment_questions(sanitize(submission.question_block))
        logger.debug(f"segmented {len(questions)} questions")

        prompt = build_prompt(questions, self._env)
        raw = await self._complete(prompt)

        candidate = self._extractor(raw)
        parsed = parse_evaluations(candidate)
        if isinstance(parsed, ParseFailure):
            logger.error(
                "evaluator response could not be parsed",
                extra={
                    "reason": parsed.reason,
                    "candidate": parsed.candidate[: self._settings.log_candidate_chars],
                },
            )
            raise ResponseParseError(parsed.reason, candidate=parsed.candidate)

        evaluations = _reconcile(parsed, len(questions), self._settings.count_mismatch)
        return aggregate(evaluations)

    async def _complete(self, prompt: Prompt) -> str:
        try:
            model = self._model_factory.create_evaluation_model()
            response = await model.ainvoke(prompt.to_langchain())
        except Exception as e:
            logger.exception("evaluator call failed")
            raise EvaluatorUnavailableError(str(e)) from e

        tracker = TokenTracker()
        tracker.track_response(response)
        logger.debug(
            "evaluator responded",
            extra={
                "input_tokens": tracker.usage.input_tokens,
                "output_tokens": tracker.usage.output_tokens,
            },
        )

        content = getattr(response, "content", None)
        text = content_to_str(content) if content else ""
        if not text.strip():
            logger.error("evaluator returned no content")
            raise EvaluatorUnavailableError("evaluator returned no message content")
        return text


def _reconcile(
    evaluations: list[QuestionEvaluation], expected: int, policy: MismatchPolicy
) -> list[QuestionEvaluation]:
    """Apply the count mismatch policy. Missing evaluations are never padded."""
    received = len(evaluations)
    if received == expected:
        return evaluations

    extra = {"expected": expected, "received": received, "policy": policy.value}
    if policy is MismatchPolicy.Reject:
        logger.error("evaluation count mismatch", extra=extra)
        raise EvaluationCountMismatchError(expected, received)

    logger.warning("evaluation count mismatch", extra=extra)
    if policy is MismatchPolicy.Truncate and received > expected:
        return evaluations[:expected]
    return evaluations

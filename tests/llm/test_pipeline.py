"""Tests for the evaluation pipeline.

The evaluator model is a stub; these tests exercise validation, the single
evaluator call, response recovery and error classification.
"""

from __future__ import annotations

import asyncio
import typing as t
from unittest.mock import MagicMock

import jinja2
import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from examlens.llm import LLMSecrets, LLMSettings, ModelFactory
from examlens.llm.config import EvaluationSettings
from examlens.llm.evaluation import EvaluationCountMismatchError, EvaluationError, EvaluationFailedError, \
    EvaluationPipeline, EvaluatorUnavailableError, InputValidationError, ResponseParseError
from examlens.model import MismatchPolicy


class TestEvaluationPipeline(object):
    """End-to-end behavior with a well-behaved evaluator."""

    def test_evaluates_questions(
        self, pipeline: EvaluationPipeline, evaluator_model: MagicMock, payload: dict[str, t.Any]
    ) -> None:
        report = asyncio.run(pipeline.evaluate(payload))

        assert report.total_score == 70
        assert len(report.metrics) == 7
        assert report.metric("Bloom Level").score == "Remember"
        assert report.metric("Higher Order").score == 50
        assert [e["question"] for e in report.evaluations] == ["What is 2+2?", "Explain photosynthesis."]
        evaluator_model.ainvoke.assert_awaited_once()

    def test_sends_rubric_and_numbered_questions(
        self, pipeline: EvaluationPipeline, evaluator_model: MagicMock, payload: dict[str, t.Any]
    ) -> None:
        asyncio.run(pipeline.evaluate(payload))

        (messages,), _ = evaluator_model.ainvoke.call_args
        assert len(messages) == 2
        assert isinstance(messages[0], SystemMessage)
        assert isinstance(messages[1], HumanMessage)
        assert messages[0].content.startswith("You are an expert academic evaluator.")
        assert messages[1].content == "1. What is 2+2?\n2. Explain photosynthesis."

    def test_sanitizes_before_segmenting(
        self, pipeline: EvaluationPipeline, evaluator_model: MagicMock, payload: dict[str, t.Any]
    ) -> None:
        payload["set1"] = "• Define ‘osmosis’.\n\n  \n• Explain “diffusion”."

        asyncio.run(pipeline.evaluate(payload))

        (messages,), _ = evaluator_model.ainvoke.call_args
        assert messages[1].content == "1. - Define 'osmosis'.\n2. - Explain \"diffusion\"."

    def test_ignores_unknown_fields(self, pipeline: EvaluationPipeline, payload: dict[str, t.Any]) -> None:
        payload["set2"] = "ignored"

        report = asyncio.run(pipeline.evaluate(payload))

        assert report.total_score == 70

    def test_empty_question_block(
        self,
        pipeline: EvaluationPipeline,
        payload: dict[str, t.Any],
        respond_with: t.Callable[[str], None],
    ) -> None:
        """No questions still makes the call and reports zeros."""
        payload["set1"] = "   \n\n  "
        respond_with("[]")

        report = asyncio.run(pipeline.evaluate(payload))

        assert report.total_score == 0
        assert report.metric("Bloom Level").score == "N/A"
        assert report.evaluations == []

    def test_custom_extractor(
        self, model_factory: MagicMock, llm_env: jinja2.Environment, payload: dict[str, t.Any]
    ) -> None:
        extractor = MagicMock(return_value='[{"overallScore": 40}, {"overallScore": 60}]')
        pipeline = EvaluationPipeline(model_factory, llm_env, extractor=extractor)

        report = asyncio.run(pipeline.evaluate(payload))

        extractor.assert_called_once()
        assert report.total_score == 50


class TestEvaluationPipelineInput(object):
    """Invalid submissions are rejected before any evaluator call."""

    @pytest.mark.parametrize("field", ["outcomes", "syllabus", "set1"])
    def test_missing_field(
        self,
        field: str,
        pipeline: EvaluationPipeline,
        model_factory: MagicMock,
        payload: dict[str, t.Any],
    ) -> None:
        del payload[field]

        with pytest.raises(InputValidationError) as exc_info:
            asyncio.run(pipeline.evaluate(payload))

        assert exc_info.value.message == "Invalid input data."
        assert exc_info.value.retryable is False
        model_factory.create_evaluation_model.assert_not_called()

    @pytest.mark.parametrize("value", [42, None, ["Q1", "Q2"], {"text": "Q1"}])
    def test_non_text_field(
        self, value: t.Any, pipeline: EvaluationPipeline, evaluator_model: MagicMock, payload: dict[str, t.Any]
    ) -> None:
        payload["set1"] = value

        with pytest.raises(InputValidationError):
            asyncio.run(pipeline.evaluate(payload))

        evaluator_model.ainvoke.assert_not_awaited()

    @pytest.mark.parametrize("payload", [None, "questions", [1, 2]])
    def test_payload_not_a_mapping(self, payload: t.Any, pipeline: EvaluationPipeline) -> None:
        with pytest.raises(InputValidationError):
            asyncio.run(pipeline.evaluate(payload))


class TestEvaluationPipelineEvaluator(object):
    """Failures of the evaluator call itself."""

    def test_call_failure(
        self, pipeline: EvaluationPipeline, evaluator_model: MagicMock, payload: dict[str, t.Any]
    ) -> None:
        error = ConnectionError("connection reset")
        evaluator_model.ainvoke.side_effect = error

        with pytest.raises(EvaluatorUnavailableError) as exc_info:
            asyncio.run(pipeline.evaluate(payload))

        assert exc_info.value.__cause__ is error
        assert exc_info.value.message == "No response from AI."
        assert exc_info.value.retryable is True

    @pytest.mark.parametrize("content", ["", "   \n  "])
    def test_empty_content(
        self, content: str, pipeline: EvaluationPipeline, payload: dict[str, t.Any], respond_with: t.Callable[[str], None]
    ) -> None:
        respond_with(content)

        with pytest.raises(EvaluatorUnavailableError):
            asyncio.run(pipeline.evaluate(payload))

    def test_response_without_content(
        self, pipeline: EvaluationPipeline, evaluator_model: MagicMock, payload: dict[str, t.Any]
    ) -> None:
        evaluator_model.ainvoke.return_value = object()

        with pytest.raises(EvaluatorUnavailableError):
            asyncio.run(pipeline.evaluate(payload))

    def test_content_blocks(
        self, pipeline: EvaluationPipeline, evaluator_model: MagicMock, payload: dict[str, t.Any]
    ) -> None:
        """Structured content is flattened to text before extraction."""
        evaluator_model.ainvoke.return_value = AIMessage(
            content=[
                {"type": "text", "text": '[{"overallScore": 90},'},
                {"type": "text", "text": ' {"overallScore": 70}]'},
            ]
        )

        report = asyncio.run(pipeline.evaluate(payload))

        assert report.total_score == 80

    def test_missing_api_key(self, llm_env: jinja2.Environment, payload: dict[str, t.Any]) -> None:
        """An unconfigured evaluator is reported as unavailable."""
        factory = ModelFactory(LLMSettings(), LLMSecrets(api_key=None))
        pipeline = EvaluationPipeline(factory, llm_env)

        with pytest.raises(EvaluatorUnavailableError) as exc_info:
            asyncio.run(pipeline.evaluate(payload))

        assert isinstance(exc_info.value.__cause__, ValueError)


class TestEvaluationPipelineResponse(object):
    """Responses that cannot be turned into evaluations."""

    @pytest.mark.parametrize(
        "content",
        [
            "I cannot help with that.",
            '```json\n[{"question": "Q1",]\n```',
            '{"question": "Q1"}',
            '["Q1", "Q2"]',
        ],
    )
    def test_unparseable(
        self, content: str, pipeline: EvaluationPipeline, payload: dict[str, t.Any], respond_with: t.Callable[[str], None]
    ) -> None:
        respond_with(content)

        with pytest.raises(ResponseParseError) as exc_info:
            asyncio.run(pipeline.evaluate(payload))

        assert exc_info.value.message == "AI response could not be parsed."
        assert exc_info.value.retryable is True
        assert exc_info.value.candidate is not None

    def test_oversized_integer(
        self, pipeline: EvaluationPipeline, payload: dict[str, t.Any], respond_with: t.Callable[[str], None]
    ) -> None:
        """A number past the digit limit is an unusable answer, not an internal fault."""
        respond_with('[{"overallScore": ' + "9" * 5000 + '}, {"overallScore": 50}]')

        with pytest.raises(ResponseParseError):
            asyncio.run(pipeline.evaluate(payload))

    def test_score_beyond_float_range(
        self, pipeline: EvaluationPipeline, payload: dict[str, t.Any], respond_with: t.Callable[[str], None]
    ) -> None:
        respond_with('[{"overallScore": 1' + "0" * 400 + '}, {"overallScore": 0}]')

        report = asyncio.run(pipeline.evaluate(payload))

        assert report.total_score == 50

    def test_unexpected_failure(
        self, model_factory: MagicMock, llm_env: jinja2.Environment, payload: dict[str, t.Any]
    ) -> None:
        """Faults outside the known failure kinds become EvaluationFailedError."""
        extractor = MagicMock(side_effect=RuntimeError("boom"))
        pipeline = EvaluationPipeline(model_factory, llm_env, extractor=extractor)

        with pytest.raises(EvaluationFailedError) as exc_info:
            asyncio.run(pipeline.evaluate(payload))

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert exc_info.value.message == "Evaluation failed."
        assert isinstance(exc_info.value, EvaluationError)


class TestEvaluationPipelineCountMismatch(object):
    """The evaluator returns a different number of evaluations than questions."""

    def make_pipeline(
        self, model_factory: MagicMock, llm_env: jinja2.Environment, policy: MismatchPolicy
    ) -> EvaluationPipeline:
        return EvaluationPipeline(model_factory, llm_env, settings=EvaluationSettings(count_mismatch=policy))

    def test_truncates_surplus_by_default(
        self,
        pipeline: EvaluationPipeline,
        payload: dict[str, t.Any],
        sample_evaluations: list[dict[str, t.Any]],
        respond_with_evaluations: t.Callable[[t.Any], None],
    ) -> None:
        surplus = dict(sample_evaluations[0], question="Unasked", overallScore=0)
        respond_with_evaluations([*sample_evaluations, surplus])

        report = asyncio.run(pipeline.evaluate(payload))

        assert len(report.evaluations) == 2
        assert report.total_score == 70

    def test_shortfall_is_not_padded(
        self,
        pipeline: EvaluationPipeline,
        payload: dict[str, t.Any],
        sample_evaluations: list[dict[str, t.Any]],
        respond_with_evaluations: t.Callable[[t.Any], None],
    ) -> None:
        respond_with_evaluations(sample_evaluations[:1])

        report = asyncio.run(pipeline.evaluate(payload))

        assert len(report.evaluations) == 1
        assert report.total_score == 80

    def test_ignore_keeps_everything(
        self,
        model_factory: MagicMock,
        llm_env: jinja2.Environment,
        payload: dict[str, t.Any],
        sample_evaluations: list[dict[str, t.Any]],
        respond_with_evaluations: t.Callable[[t.Any], None],
    ) -> None:
        pipeline = self.make_pipeline(model_factory, llm_env, MismatchPolicy.Ignore)
        respond_with_evaluations([*sample_evaluations, dict(sample_evaluations[0], overallScore=10)])

        report = asyncio.run(pipeline.evaluate(payload))

        assert len(report.evaluations) == 3
        assert report.total_score == 50

    @pytest.mark.parametrize("count", [0, 1, 3])
    def test_reject(
        self,
        count: int,
        model_factory: MagicMock,
        llm_env: jinja2.Environment,
        payload: dict[str, t.Any],
        sample_evaluations: list[dict[str, t.Any]],
        respond_with_evaluations: t.Callable[[t.Any], None],
    ) -> None:
        pipeline = self.make_pipeline(model_factory, llm_env, MismatchPolicy.Reject)
        respond_with_evaluations((sample_evaluations * 2)[:count])

        with pytest.raises(EvaluationCountMismatchError) as exc_info:
            asyncio.run(pipeline.evaluate(payload))

        assert exc_info.value.expected == 2
        assert exc_info.value.received == count
        assert isinstance(exc_info.value, ResponseParseError)

    def test_reject_accepts_matching_count(
        self,
        model_factory: MagicMock,
        llm_env: jinja2.Environment,
        payload: dict[str, t.Any],
    ) -> None:
        pipeline = self.make_pipeline(model_factory, llm_env, MismatchPolicy.Reject)

        report = asyncio.run(pipeline.evaluate(payload))

        assert len(report.evaluations) == 2

"""Evaluation pipeline for exam question quality."""

from .aggregate import aggregate, coerce_score, dominant_bloom, round_half_up
from .errors import EvaluationCountMismatchError, EvaluationError, EvaluationFailedError, \
    EvaluatorUnavailableError, InputValidationError, ResponseParseError
from .extract import extract_json_array
from .parse import parse_evaluations, ParseFailure
from .pipeline import EvaluationPipeline
from .prompt import build_prompt, Prompt
from .questions import sanitize, segment_questions

__all__ = [
    "EvaluationPipeline",
    "Prompt",
    "ParseFailure",
    "aggregate",
    "build_prompt",
    "coerce_score",
    "dominant_bloom",
    "extract_json_array",
    "parse_evaluations",
    "round_half_up",
    "sanitize",
    "segment_questions",
    # errors
    "EvaluationError",
    "EvaluationCountMismatchError",
    "EvaluationFailedError",
    "EvaluatorUnavailableError",
    "InputValidationError",
    "ResponseParseError",
]

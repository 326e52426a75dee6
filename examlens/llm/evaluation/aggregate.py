"""Aggregation of per-question evaluations into a summary report."""

from __future__ import annotations

import logging
import math
import typing as t

from examlens.model import EvaluationReport, Metric, QuestionEvaluation

logger = logging.getLogger(__name__)

NoBloomLevel: t.Final[str] = "N/A"
MinScore: t.Final[float] = 0.0
MaxScore: t.Final[float] = 100.0

# placeholders until course-outcome and syllabus matching exist
COMatch: t.Final[int] = 70
SyllabusMatch: t.Final[int] = 75
UnitCoverage: t.Final[str] = "3 / 5"
Difficulty: t.Final[str] = "Medium"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding toward positive infinity."""
    return math.floor(value + 0.5)


def coerce_score(value: t.Any, *, field: str = "score") -> float:
    """Interpret an evaluator-supplied score, clamped to [0, 100].

    Numbers and numeric strings are accepted; anything else counts as 0.
    """
    score: int | float | None = None
    if isinstance(value, bool):
        score = None
    elif isinstance(value, (int, float)):
        # ints are clamped before conversion; they can exceed the float range
        score = value
    elif isinstance(value, str):
        try:
            score = float(value.strip())
        except ValueError:
            score = None

    if score is None or (isinstance(score, float) and math.isnan(score)):
        logger.warning("non-numeric score treated as 0", extra={"field": field, "value": repr(value)})
        return MinScore

    clamped = float(min(max(score, MinScore), MaxScore))
    if clamped != score:
        logger.warning("score out of range, clamping", extra={"field": field, "clamped_to": clamped})
    return clamped


def is_higher_order(value: t.Any) -> bool:
    return value is True


def average_score(evaluations: t.Sequence[QuestionEvaluation], field: str) -> int:
    """Rounded mean of one score field; 0 for an empty batch."""
    if not evaluations:
        return 0
    total = sum(coerce_score(e.get(field), field=field) for e in evaluations)
    return round_half_up(total / len(evaluations))


def dominant_bloom(evaluations: t.Sequence[QuestionEvaluation]) -> str:
    """Most frequent Bloom level; ties go to the label seen first."""
    counts: dict[str, int] = {}
    for e in evaluations:
        label = e.get("bloom")
        if not label:
            continue
        key = label if isinstance(label, str) else str(label)
        counts[key] = counts.get(key, 0) + 1
    if not counts:
        return NoBloomLevel
    # max() keeps the first of equal maxima, and dicts keep insertion order
    return max(counts, key=counts.__getitem__)


def higher_order_percentage(evaluations: t.Sequence[QuestionEvaluation]) -> int:
    if not evaluations:
        return 0
    count = sum(1 for e in evaluations if is_higher_order(e.get("higherOrder")))
    return round_half_up(100 * count / len(evaluations))


def aggregate(evaluations: t.Sequence[QuestionEvaluation]) -> EvaluationReport:
    """Reduce parsed evaluations into an EvaluationReport.

    Args:
        evaluations: Parsed evaluator records, one per question

    Returns:
        EvaluationReport with the seven display metrics in fixed order and
        the evaluations passed through unchanged
    """
    spelling = average_score(evaluations, "spellingScore")
    grammar = average_score(evaluations, "grammarScore")
    clarity = average_score(evaluations, "clarityScore")
    overall = average_score(evaluations, "overallScore")

    metrics = [
        Metric(label="Spelling", score=spelling),
        Metric(label="Grammar", score=grammar),
        Metric(label="Clarity", score=clarity),
        Metric(label="Bloom Level", score=dominant_bloom(evaluations)),
        Metric(label="Higher Order", score=higher_order_percentage(evaluations)),
        Metric(label="CO Match", score=COMatch),
        Metric(label="Syllabus Match", score=SyllabusMatch),
    ]

    return EvaluationReport(
        total_score=overall,
        metrics=metrics,
        unit_coverage=UnitCoverage,
        difficulty=Difficulty,
        evaluations=[dict(e) for e in evaluations],
    )

from __future__ import annotations

import typing as t

import pydantic as p

from .base import BaseModel

# QuestionEvaluation mirrors the evaluator's wire format, so keys stay camelCase
QuestionEvaluation = t.TypedDict(
    "QuestionEvaluation",
    {
        "question": str,
        "bloom": str,
        "higherOrder": bool,
        "clarityScore": int,
        "grammarScore": int,
        "spellingScore": int,
        "overallScore": int,
        "suggestions": list[str],
    },
    total=False,
)


class Metric(BaseModel):
    label: str
    score: int | str


class EvaluationReport(BaseModel):
    """Aggregated quality report over one batch of evaluated questions."""

    model_config = p.ConfigDict(populate_by_name=True)

    total_score: int = p.Field(alias="totalScore")
    metrics: list[Metric]
    unit_coverage: str = p.Field(alias="unitCoverage")
    difficulty: str
    # passed through as returned by the evaluator, unvalidated
    evaluations: list[dict[str, t.Any]]

    def metric(self, label: str) -> Metric:
        for m in self.metrics:
            if m.label == label:
                return m
        raise KeyError(label)

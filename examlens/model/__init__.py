__all__ = [
    # Base
    "BaseModel",
    # Enums
    "DeploymentEnvironment",
    "MismatchPolicy",
    # Submission
    "Submission",
    # Evaluation
    "EvaluationReport",
    "Metric",
    "QuestionEvaluation",
]

from .base import BaseModel
from .enum import DeploymentEnvironment, MismatchPolicy
from .evaluation import EvaluationReport, Metric, QuestionEvaluation
from .submission import Submission

"""Exceptions for question evaluation.

Every error carries a user-facing `message` and a `retryable` flag so that
callers can tell a bad request apart from a flaky evaluator.
"""

from __future__ import annotations

import typing as t


class EvaluationError(Exception):
    """Error while evaluating a batch of questions."""

    message: t.ClassVar[str] = "Evaluation failed."
    retryable: t.ClassVar[bool] = True

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)
        self.detail = detail


class InputValidationError(EvaluationError):
    """The submission is missing a field or a field is not text."""

    message = "Invalid input data."
    retryable = False


class EvaluatorUnavailableError(EvaluationError):
    """The evaluator call failed or produced no usable content."""

    message = "No response from AI."


class ResponseParseError(EvaluationError):
    """The evaluator answered, but not with a JSON array of objects."""

    message = "AI response could not be parsed."

    def __init__(self, detail: str | None = None, *, candidate: str | None = None) -> None:
        super().__init__(detail)
        self.candidate = candidate


class EvaluationCountMismatchError(ResponseParseError):
    """The evaluator returned a different number of evaluations than questions asked."""

    def __init__(self, expected: int, received: int) -> None:
        super().__init__(f"expected {expected} evaluations, received {received}")
        self.expected = expected
        self.received = received


class EvaluationFailedError(EvaluationError):
    """An unexpected fault occurred while evaluating."""

    pass

"""View models for the question analyzer web application."""

__all__ = [
    "AnalyzeRequest",
    "ErrorResponse",
]

from .analyze import AnalyzeRequest, ErrorResponse

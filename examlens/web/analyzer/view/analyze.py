"""View models for question analysis."""

from __future__ import annotations

import pydantic as p


class AnalyzeRequest(p.BaseModel):
    """Request body for question analysis.

    Documents the expected shape; the route validates the raw body itself so
    that bad input is reported in the same error format as other failures.
    """

    outcomes: str = p.Field(..., description="Course outcomes the questions should address")
    syllabus: str = p.Field(..., description="Syllabus content the questions should cover")
    set1: str = p.Field(..., description="Question block, one question per paragraph")


class ErrorResponse(p.BaseModel):
    """Error payload for a failed analysis."""

    error: str = p.Field(..., description="User-facing error message")
    retryable: bool = p.Field(..., description="Whether repeating the same request may succeed")

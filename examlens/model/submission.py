from __future__ import annotations

import typing as t

import pydantic as p

from .base import BaseModel


class Submission(BaseModel):
    """A batch of exam questions submitted for evaluation.

    `outcomes` and `syllabus` are accepted but not yet consumed; they are
    reserved for course-outcome and syllabus matching.
    """

    model_config = p.ConfigDict(populate_by_name=True, extra="ignore")

    outcomes: p.StrictStr
    syllabus: p.StrictStr
    question_block: p.StrictStr = p.Field(alias="set1")

    @classmethod
    def from_payload(cls, payload: t.Any) -> Submission:
        """Validate an inbound payload, raising `pydantic.ValidationError` on bad input."""
        return cls.model_validate(payload)

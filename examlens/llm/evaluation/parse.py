"""Strict parsing of the extracted evaluation array."""

from __future__ import annotations

import json
import typing as t
from dataclasses import dataclass

from examlens.model import QuestionEvaluation


@dataclass(frozen=True)
class ParseFailure:
    """A candidate that could not be read as a JSON array of objects."""

    candidate: str
    reason: str


def parse_evaluations(candidate: str) -> list[QuestionEvaluation] | ParseFailure:
    """Deserialize a candidate into per-question evaluation records.

    Only the shape is checked (an array whose elements are all objects);
    individual fields are left for the aggregator to interpret. Never raises.
    """
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        return ParseFailure(candidate, f"invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})")
    except RecursionError:
        return ParseFailure(candidate, "invalid JSON: nesting too deep")
    except ValueError as e:
        # e.g. integer literals past the interpreter's digit limit
        return ParseFailure(candidate, f"invalid JSON: {e}")

    if not isinstance(data, list):
        return ParseFailure(candidate, f"expected a JSON array, got {type(data).__name__}")

    for i, item in enumerate(data):
        if not isinstance(item, dict):
            return ParseFailure(candidate, f"element {i} is {type(item).__name__}, expected an object")

    return t.cast(list[QuestionEvaluation], data)

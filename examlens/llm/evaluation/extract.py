"""Recovery of a JSON array from free-form evaluator output."""

from __future__ import annotations

import re

_OPEN_FENCE = re.compile(r"```json", re.IGNORECASE)
_FENCE = re.compile(r"```")
_ARRAY = re.compile(r"\[[\s\S]*\]")


def extract_json_array(text: str) -> str:
    """Isolate the JSON array candidate in an evaluator response.

    Code fences are removed and the text trimmed. If a bracketed span exists,
    everything from the first `[` to the last `]` is returned; otherwise the
    trimmed text is returned as is, so that a malformed response fails to
    parse instead of passing as an empty evaluation.
    """
    candidate = _FENCE.sub("", _OPEN_FENCE.sub("", text)).strip()
    match = _ARRAY.search(candidate)
    if match:
        return match.group(0)
    return candidate

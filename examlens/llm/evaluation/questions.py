"""Question block normalization and segmentation."""

from __future__ import annotations

import re

_FOLD = str.maketrans({
    "•": "-",  # bullet
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
})

_SEPARATOR = re.compile(r"\n\s*\n")


def sanitize(text: str) -> str:
    """Fold bullet glyphs and curly quotes into their ASCII equivalents."""
    return text.translate(_FOLD)


def segment_questions(text: str) -> list[str]:
    """Split a question block into questions separated by blank lines.

    Whitespace-only lines count as blank. Each question is trimmed and empty
    chunks are dropped; order is preserved.
    """
    return [chunk.strip() for chunk in _SEPARATOR.split(text) if chunk.strip()]

"""
chatdex - Context Assembly
===========================
Concatenates ranked chunks into the excerpt handed to prompt construction,
under a hard character budget.
"""

from __future__ import annotations

from collections.abc import Sequence

from chatdex.src.core.models import Chunk

CHUNK_SEPARATOR = "\n\n"
TRUNCATION_SEPARATOR = "\n...\n"
ELLIPSIS = "..."

# Room reserved for the truncation markers when the budget runs out.
_TRUNCATION_RESERVE = 10
# A truncated tail shorter than this is not worth including.
_MIN_TRUNCATED_CHARS = 50


def assemble_context(chunks: Sequence[Chunk], max_chars: int) -> str:
    """
    Join chunk texts with a blank line, never exceeding *max_chars*.

    When the next chunk does not fit, as much of it as fits in the
    remaining budget (less a small reserve) is appended between a
    ``...`` separator line and a trailing ``...``, and assembly stops.
    """
    context = ""
    for chunk in chunks:
        separator = CHUNK_SEPARATOR if context else ""
        if len(context) + len(separator) + len(chunk.text) > max_chars:
            remaining = max_chars - len(context) - _TRUNCATION_RESERVE
            if remaining > _MIN_TRUNCATED_CHARS:
                context += (TRUNCATION_SEPARATOR if context else "") + chunk.text[:remaining] + ELLIPSIS
            break
        context += separator + chunk.text
    return context

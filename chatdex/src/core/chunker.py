"""
chatdex - TranscriptChunker
============================
Turns a conversation into a single transcript and slices it into
overlapping, boundary-aware chunks.

Transcript format::

    [USER]: first question

    [ASSISTANT]: first answer

Chunking strategy
-----------------
A fixed-size window (``CHUNK_SIZE``) slides over the transcript with
``CHUNK_OVERLAP`` characters of overlap.  Before cutting, the chunker
looks back at most ``BOUNDARY_WINDOW`` characters for a natural boundary
and, when one exists, cuts right after it.  Boundaries in priority-free
order (the latest one wins):

    1. A turn boundary (``\\n\\n[USER]:`` / ``\\n\\n[ASSISTANT]:``).
    2. A sentence terminator followed by a space (``". "``).
    3. A newline.

The search is a handful of bounded ``str.rfind`` scans, so its cost does
not depend on the shape of the input.  The loop itself is capped at
``MAX_CHUNK_ITERATIONS``; anything left past the cap is not chunked.
Once the window reaches the end of the transcript it keeps advancing
(at least one character per step), emitting ever shorter tail chunks,
until fewer than ``MIN_CHUNK_CHARS`` characters remain.

Usage:
    from chatdex.src.core.chunker import TranscriptChunker
    chunker = TranscriptChunker()
    chunks  = chunker.create_chunks(chunker.build_transcript(messages))
"""

from __future__ import annotations

from collections.abc import Iterable

from chatdex.config.settings import Settings, settings as default_settings
from chatdex.src.core.models import ChatMessage, Chunk, Role
from chatdex.src.utils.logger import get_logger
from chatdex.src.utils.text_utils import extract_keywords

logger = get_logger(__name__, tag="CHUNKER")

TURN_SEPARATOR = "\n\n"

# Markers are matched literally; each one is cut *after* its last character.
BOUNDARY_MARKERS: tuple[str, ...] = tuple(f"{TURN_SEPARATOR}[{role.label}]:" for role in Role) + (". ", "\n")


class TranscriptChunker:
    """
    Sliding-window chunker for conversation transcripts.

    Parameters
    ----------
    config
        Settings providing the chunking constants.  Defaults to the
        shared ``settings`` instance.
    """

    __slots__ = ("_size", "_overlap", "_min_chars", "_max_iterations", "_window")

    def __init__(self, config: Settings | None = None) -> None:
        config = config or default_settings
        self._size = config.CHUNK_SIZE
        self._overlap = config.CHUNK_OVERLAP
        self._min_chars = config.MIN_CHUNK_CHARS
        self._max_iterations = config.MAX_CHUNK_ITERATIONS
        self._window = config.BOUNDARY_WINDOW


    @staticmethod
    def build_transcript(messages: Iterable[ChatMessage]) -> str:
        """Render messages as ``[ROLE]: content`` blocks separated by a blank line."""
        return TURN_SEPARATOR.join(message.to_transcript() for message in messages)


    def create_chunks(self, full_text: str) -> list[Chunk]:
        """
        Split *full_text* into overlapping chunks.

        Returns
        -------
        list[Chunk]
            Chunks in document order with sequential ids.  Slices whose
            trimmed text is ``MIN_CHUNK_CHARS`` long or shorter are dropped.
        """
        chunks: list[Chunk] = []
        length = len(full_text)
        start = 0
        iterations = 0

        while start < length:
            if iterations >= self._max_iterations:
                logger.warning("Iteration cap (%d) reached at offset %d of %d — remaining text not chunked.", self._max_iterations, start, length)
                break
            iterations += 1

            end = min(start + self._size, length)
            if end < length:
                boundary = self._find_boundary(full_text, start, end)
                if boundary > start:
                    end = boundary

            text = full_text[start:end].strip()
            if len(text) > self._min_chars:
                chunks.append(Chunk(id=len(chunks), text=text, start=start, end=end, keywords=extract_keywords(text)))

            start = max(start + 1, end - self._overlap)
            if start >= length - self._min_chars:
                break

        logger.debug("%d chars → %d chunk(s) in %d iteration(s).", length, len(chunks), iterations)
        return chunks


    def _find_boundary(self, text: str, start: int, end: int) -> int:
        """
        Return the offset just after the latest boundary marker, or ``-1``.

        A marker qualifies when it begins strictly after the window start
        (``start + CHUNK_SIZE - BOUNDARY_WINDOW``, never before ``start``)
        and no later than *end*.
        """
        window_start = max(start + self._size - self._window, start)
        best = -1
        for marker in BOUNDARY_MARKERS:
            pos = text.rfind(marker, window_start + 1, end + len(marker))
            if pos != -1:
                best = max(best, pos + len(marker))
        return best

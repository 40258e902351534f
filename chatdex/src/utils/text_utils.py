"""
chatdex - Text Utilities
=========================
Keyword extraction for the conversation indexer.

``extract_keywords`` turns free text into a term-frequency map that both
chunk indexing and query scoring use, so chunks and queries are always
normalised identically.  Everything here is stateless and side-effect-free.
"""

from __future__ import annotations

import re
from collections import Counter

# ── Noise pattern ──────────────────────────────────────────────────────
# Applied after lower-casing: anything that is not an ASCII letter,
# a digit, or whitespace becomes a space.
_NON_WORD_RE = re.compile(r"[^a-z0-9\s]")

_MIN_TOKEN_LEN = 3

# ── Stop words ─────────────────────────────────────────────────────────
# Closed list of English function words that carry no retrieval signal.
STOP_WORDS: frozenset[str] = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "must", "this", "that", "these", "those",
    "it", "its", "you", "your", "we", "our", "they", "their", "he", "she",
    "his", "her", "i", "my", "me", "can", "just", "so", "as", "if", "then",
    "than", "when", "what", "which", "who", "how", "all", "each", "every",
    "both", "few", "more", "most", "other", "some", "such", "no", "not",
    "only", "same", "into", "from", "up", "down", "out", "about", "after",
    "before", "between", "through", "during", "above", "below",
})


def tokenize(text: str) -> list[str]:
    """
    Split *text* into normalised keyword tokens.

    Steps:
        1. Lower-case.
        2. Replace every character outside ``[a-z0-9]`` and whitespace
           with a space (so ``"don't"`` becomes ``"don"`` + ``"t"``).
        3. Split on whitespace.
        4. Drop tokens shorter than three characters, stop words, and
           purely numeric tokens.
    """
    normalised = _NON_WORD_RE.sub(" ", text.lower())
    return [
        token for token in normalised.split()
        if len(token) >= _MIN_TOKEN_LEN and token not in STOP_WORDS and not token.isdigit()
    ]


def extract_keywords(text: str) -> Counter[str]:
    """
    Return the term-frequency map of *text*.

    Examples::

        extract_keywords("The Rust borrow checker, the RUST compiler")
        → Counter({"rust": 2, "borrow": 1, "checker": 1, "compiler": 1})

        extract_keywords("is it 2024 or not?")
        → Counter()
    """
    return Counter(tokenize(text))

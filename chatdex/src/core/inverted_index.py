"""
chatdex - Inverted Index
=========================
Builds an immutable ``IndexSnapshot`` from a chunk set.

A snapshot bundles everything a search needs: the chunks themselves, the
term → chunk-id posting lists, and the term → document-frequency counts.
It is never mutated after construction, so the indexer can replace the
whole thing with a single reference swap on every rebuild.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from chatdex.src.core.models import Chunk


@dataclass(frozen=True)
class IndexSnapshot:
    """Read-only view of one indexed conversation."""

    chunks: tuple[Chunk, ...] = ()
    postings: Mapping[str, tuple[int, ...]] = field(default_factory=lambda: MappingProxyType({}))
    document_frequency: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))

    def __len__(self) -> int:
        return len(self.chunks)

    def doc_freq(self, term: str) -> int:
        """Number of chunks containing *term* (0 when unseen)."""
        return self.document_frequency.get(term, 0)


def build_index(chunks: Sequence[Chunk]) -> IndexSnapshot:
    """
    Aggregate per-chunk keywords into posting lists and document frequencies.

    Each chunk contributes its id once to every keyword it contains, and
    increments that keyword's document frequency by exactly one,
    regardless of how often the keyword occurs inside the chunk.
    """
    postings: dict[str, list[int]] = {}
    document_frequency: dict[str, int] = {}

    for chunk in chunks:
        for keyword in chunk.keywords:
            postings.setdefault(keyword, []).append(chunk.id)
            document_frequency[keyword] = document_frequency.get(keyword, 0) + 1

    return IndexSnapshot(
        chunks=tuple(chunks),
        postings=MappingProxyType({term: tuple(ids) for term, ids in postings.items()}),
        document_frequency=MappingProxyType(document_frequency),
    )

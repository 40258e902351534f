"""
chatdex - TF-IDF Scorer
========================
Ranks the chunks of an ``IndexSnapshot`` against a free-text query.

Algorithm
---------
1. Extract query keywords with the same normalisation used for chunks.
2. No keywords (query is only stop words / noise) → return the last
   ``top_k`` chunks: with nothing to match on, recent turns are the best
   guess.
3. For every chunk::

       score = Σ tf_chunk(t) × ln(N / df(t)) × tf_query(t)

   over the query terms present in the chunk, then::

       score *= 1 + (chunk.id / N) × RECENCY_WEIGHT

4. Keep positive scores, sort descending (ties → lower chunk id first),
   take ``top_k``, and re-sort the selection by transcript offset so the
   excerpt reads chronologically.
"""

from __future__ import annotations

import math

from chatdex.config.settings import Settings, settings as default_settings
from chatdex.src.core.inverted_index import IndexSnapshot
from chatdex.src.core.models import Chunk
from chatdex.src.utils.logger import get_logger
from chatdex.src.utils.text_utils import extract_keywords

logger = get_logger(__name__, tag="SCORER")


class TfIdfScorer:
    """
    Lexical TF-IDF ranking with a recency bias.

    Parameters
    ----------
    config
        Settings providing ``TOP_K`` and ``RECENCY_WEIGHT``.
    """

    __slots__ = ("_top_k", "_recency_weight")

    def __init__(self, config: Settings | None = None) -> None:
        config = config or default_settings
        self._top_k = config.TOP_K
        self._recency_weight = config.RECENCY_WEIGHT


    @property
    def default_top_k(self) -> int:
        return self._top_k


    def score_chunks(self, snapshot: IndexSnapshot, query: str) -> dict[int, float]:
        """
        Return ``{chunk_id: score}`` for every chunk scoring above zero.

        Only chunks listed in the posting lists of at least one query term
        are visited; all other chunks would score zero anyway.
        """
        query_keywords = extract_keywords(query)
        total = len(snapshot)
        if not query_keywords or total == 0:
            return {}

        raw: dict[int, float] = {}
        for term, query_freq in query_keywords.items():
            df = snapshot.doc_freq(term)
            if df == 0:
                continue
            idf = math.log(total / df)
            for chunk_id in snapshot.postings[term]:
                tf = snapshot.chunks[chunk_id].keywords[term]
                raw[chunk_id] = raw.get(chunk_id, 0.0) + tf * idf * query_freq

        scores: dict[int, float] = {}
        for chunk_id, score in raw.items():
            score *= 1 + (chunk_id / total) * self._recency_weight
            if score > 0:
                scores[chunk_id] = score
        return scores


    def rank(self, snapshot: IndexSnapshot, query: str, top_k: int | None = None) -> list[Chunk]:
        """
        Return up to *top_k* relevant chunks in transcript order.

        Returns an empty list for an empty snapshot or a non-positive
        *top_k*.
        """
        top_k = self._top_k if top_k is None else top_k
        if len(snapshot) == 0 or top_k <= 0:
            return []

        if not extract_keywords(query):
            logger.debug("Query has no keywords — returning the %d most recent chunk(s).", top_k)
            return list(snapshot.chunks[-top_k:])

        scores = self.score_chunks(snapshot, query)
        ranked = sorted(scores.items(), key=lambda item: (-item[1], item[0]))[:top_k]
        selected = [snapshot.chunks[chunk_id] for chunk_id, _ in ranked]

        logger.debug("%d of %d chunk(s) matched, returning %d.", len(scores), len(snapshot), len(selected))
        return sorted(selected, key=lambda chunk: chunk.start)

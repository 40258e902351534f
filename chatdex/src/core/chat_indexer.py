"""
chatdex - ChatIndexer
======================
Retrieval engine over the history of one conversation.

Architecture
------------
``TranscriptChunker``
    Renders messages into a transcript and slices it into chunks.

``build_index``
    Produces an immutable ``IndexSnapshot`` (chunks + postings + DF).

``TfIdfScorer``
    Ranks snapshot chunks against a query.

``assemble_context``
    Joins the ranked chunks under the ``MAX_CONTEXT_CHARS`` budget.

State
-----
The only mutable state is ``self._snapshot``: ``None`` while unindexed,
otherwise the snapshot of the last indexed conversation.  A rebuild
constructs a complete new snapshot before assigning it, and reads take
the reference once, so a search never observes a half-built index.
The engine provides no locking beyond that.

Degradation
-----------
Nothing in here raises for content: an empty conversation indexes to
zero chunks, an unindexed engine searches to ``[]`` / ``""``, and a
keyword-less query falls back to the most recent chunks.

Usage:
    from chatdex.src.core.chat_indexer import ChatIndexer
    indexer = ChatIndexer()
    indexer.index_conversation([{"role": "user", "content": "..."}, ...])
    context = indexer.get_context_for_query("what did we decide about rust?")
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from chatdex.config.settings import Settings, settings as default_settings
from chatdex.src.core.chunker import TranscriptChunker
from chatdex.src.core.context import assemble_context
from chatdex.src.core.inverted_index import IndexSnapshot, build_index
from chatdex.src.core.models import ChatMessage, Chunk
from chatdex.src.core.scorer import TfIdfScorer
from chatdex.src.utils.logger import get_logger

logger = get_logger(__name__, tag="INDEXER")

# ── Type aliases ───────────────────────────────────────────────────────
MessageLike = ChatMessage | Mapping[str, str]


class ChatIndexer:
    """
    Conversation index with TF-IDF search and budgeted context assembly.

    Parameters
    ----------
    config
        Settings providing chunking and retrieval constants.  Defaults to
        the shared ``settings`` instance.
    chunker
        Optional custom ``TranscriptChunker``.
    scorer
        Optional custom ``TfIdfScorer``.
    """

    __slots__ = ("_chunker", "_scorer", "_max_context_chars", "_snapshot")

    def __init__(self, config: Settings | None = None, chunker: TranscriptChunker | None = None, scorer: TfIdfScorer | None = None) -> None:
        config = config or default_settings
        self._chunker = chunker or TranscriptChunker(config)
        self._scorer = scorer or TfIdfScorer(config)
        self._max_context_chars = config.MAX_CONTEXT_CHARS
        self._snapshot: IndexSnapshot | None = None

    # ══════════════════════════════════════════════════════════════════
    #  STATE
    # ══════════════════════════════════════════════════════════════════

    @property
    def is_indexed(self) -> bool:
        return self._snapshot is not None


    @property
    def chunks(self) -> tuple[Chunk, ...]:
        """Chunks of the current index (empty while unindexed)."""
        snapshot = self._snapshot
        return snapshot.chunks if snapshot is not None else ()


    @property
    def chunk_count(self) -> int:
        return len(self.chunks)

    # ══════════════════════════════════════════════════════════════════
    #  INDEXING
    # ══════════════════════════════════════════════════════════════════

    def index_conversation(self, messages: Sequence[MessageLike] | None) -> int:
        """
        Rebuild the index from a full conversation.

        Parameters
        ----------
        messages
            Ordered turns, as ``ChatMessage`` objects or ``{"role", "content"}``
            mappings.  Mappings are validated, so an unknown role raises
            ``pydantic.ValidationError``.

        Returns
        -------
        int
            Number of chunks indexed.  ``0`` for an empty or missing
            conversation, which also leaves the engine unindexed.
        """
        if not messages:
            self._snapshot = None
            return 0

        turns = [message if isinstance(message, ChatMessage) else ChatMessage.model_validate(message) for message in messages]
        transcript = self._chunker.build_transcript(turns)
        snapshot = build_index(self._chunker.create_chunks(transcript))
        self._snapshot = snapshot

        logger.info("Indexed %d chunk(s) from %d message(s) (%d terms).", len(snapshot), len(turns), len(snapshot.postings))
        return len(snapshot)


    def clear(self) -> None:
        """Drop the index and return to the unindexed state."""
        self._snapshot = None
        logger.debug("Index cleared.")

    # ══════════════════════════════════════════════════════════════════
    #  RETRIEVAL
    # ══════════════════════════════════════════════════════════════════

    def search(self, query: str, top_k: int | None = None) -> list[Chunk]:
        """
        Return up to *top_k* (default ``TOP_K``) relevant chunks in
        transcript order; ``[]`` while unindexed.
        """
        snapshot = self._snapshot
        if snapshot is None:
            return []
        return self._scorer.rank(snapshot, query, top_k)


    def score(self, query: str) -> dict[int, float]:
        """Raw ``{chunk_id: score}`` map for *query* (diagnostics)."""
        snapshot = self._snapshot
        if snapshot is None:
            return {}
        return self._scorer.score_chunks(snapshot, query)


    def get_context_for_query(self, query: str) -> str:
        """Relevant conversation excerpt for *query*, at most ``MAX_CONTEXT_CHARS`` long."""
        chunks = self.search(query)
        if not chunks:
            return ""
        context = assemble_context(chunks, self._max_context_chars)
        logger.debug("Context for query '%s': %d chunk(s), %d chars.", query[:50], len(chunks), len(context))
        return context


    def __repr__(self) -> str:
        return f"ChatIndexer(indexed={self.is_indexed}, chunks={self.chunk_count})"

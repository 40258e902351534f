"""
chatdex - Conversation Query Script
====================================
CLI entry point that orchestrates:
    1. Load settings (fail-fast on invalid ``CHATDEX_*`` values).
    2. Read a conversation file: a JSON list of ``{"role", "content"}``
       objects, or an object with a ``"messages"`` list.
    3. Index it with a fresh ``ChatIndexer``.
    4. Print the ranked chunks and the assembled context for the query,
       followed by a timing summary.

Flags:
    --top-k N        Number of chunks to retrieve (default: ``TOP_K``); the
                     assembled context is built from exactly these chunks.
    --show-scores    Print the TF-IDF score of every matching chunk.

Usage:
    python -m chatdex.scripts.query_history chat.json "rust ownership"
    python -m chatdex.scripts.query_history chat.json "lifetimes" --top-k 2 --show-scores
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path

# ── Ensure project root is importable when run directly ────────────────
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


# ── CLI Argument Parsing ───────────────────────────────────────────────

def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="query_history", description="chatdex — Index a saved conversation and retrieve history relevant to a query.")
    parser.add_argument("conversation", type=Path, help="JSON file holding the conversation messages.")
    parser.add_argument("query", help="Question to retrieve history for.")
    parser.add_argument("--top-k", type=int, default=None, help="Number of chunks to retrieve and assemble into the context (default: settings TOP_K).")
    parser.add_argument("--show-scores", action="store_true", default=False, help="Print the score of every matching chunk.")
    return parser.parse_args(argv)


def _load_messages(path: Path) -> list[dict[str, str]]:
    """Read the conversation file; raises ``OSError`` / ``ValueError`` on bad input."""
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("messages", [])
    if not isinstance(payload, list):
        raise ValueError(f"Expected a list of messages in {path}, got {type(payload).__name__}")
    return payload


# ── Main Orchestration ─────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    t_start = time.perf_counter()

    try:
        from chatdex.config.settings import settings
    except Exception as exc:
        print("\n[FATAL] Configuration error — check your CHATDEX_* environment / .env file:\n")
        print(f"  {exc}")
        print()
        return 1

    from pydantic import ValidationError

    from chatdex.src.core.chat_indexer import ChatIndexer
    from chatdex.src.core.context import assemble_context
    from chatdex.src.utils.logger import get_logger

    logger = get_logger(__name__)

    # ── 1. Load conversation ───────────────────────────────────────────
    try:
        raw_messages = _load_messages(args.conversation)
    except (OSError, ValueError) as exc:
        logger.error("Cannot read conversation %s: %s", args.conversation, exc)
        return 1

    # ── 2. Index (timed) ───────────────────────────────────────────────
    indexer = ChatIndexer(settings)
    t_index = time.perf_counter()
    try:
        chunk_count = indexer.index_conversation(raw_messages)
    except ValidationError as exc:
        logger.error("Invalid message in %s: %s", args.conversation, exc)
        return 1
    index_ms = (time.perf_counter() - t_index) * 1000

    # ── 3. Retrieve (timed) ────────────────────────────────────────────
    t_search = time.perf_counter()
    results = indexer.search(args.query, args.top_k)
    context = assemble_context(results, settings.MAX_CONTEXT_CHARS)
    search_ms = (time.perf_counter() - t_search) * 1000

    _print_header(args.conversation, args.query, len(raw_messages), chunk_count)

    if args.show_scores:
        scores = indexer.score(args.query)
        print("  SCORES")
        print("-" * 60)
        for chunk_id, score in sorted(scores.items(), key=lambda item: (-item[1], item[0])):
            print(f"  chunk {chunk_id:>4} : {score:>8.4f}")
        if not scores:
            print("  (no chunk matched — recency fallback applies)")
        print("-" * 60)

    for rank, chunk in enumerate(results, 1):
        print(f"\n--- Chunk {chunk.id} (#{rank}, chars {chunk.start}–{chunk.end}) ---")
        print(chunk.text)

    print("\n" + "=" * 60)
    print("  ASSEMBLED CONTEXT")
    print("=" * 60)
    print(context or "(empty)")

    _print_footer(len(results), len(context), index_ms, search_ms, time.perf_counter() - t_start)
    return 0


# ── Pretty-print helpers ──────────────────────────────────────────────

def _print_header(path: Path, query: str, message_count: int, chunk_count: int) -> None:
    print()
    print("=" * 60)
    print("  CHATDEX — Conversation History Query")
    print("=" * 60)
    print(f"  Conversation : {path}")
    print(f"  Messages     : {message_count}")
    print(f"  Chunks       : {chunk_count}")
    print(f"  Query        : {query}")
    print("=" * 60)
    print()


def _print_footer(result_count: int, context_chars: int, index_ms: float, search_ms: float, elapsed: float) -> None:
    print()
    print("=" * 60)
    print("  EXECUTION SUMMARY")
    print("-" * 60)
    print(f"  Chunks returned      : {result_count}")
    print(f"  Context length       : {context_chars} chars")
    print("-" * 60)
    print(f"  Indexing time        : {index_ms:>8.1f}ms")
    print(f"  Retrieval time       : {search_ms:>8.1f}ms")
    print(f"  Total elapsed        : {elapsed:>8.2f}s")
    print("=" * 60)
    print()


# ── Entry point ────────────────────────────────────────────────────────

if __name__ == "__main__":
    sys.exit(main())

"""
chatdex - Centralized Configuration
====================================
Uses ``pydantic-settings`` (``BaseSettings``) to load *all* configuration
from ``CHATDEX_``-prefixed environment variables and the project-level
``.env`` file.

Every field has a default, so the engine runs with no environment at all.
The retrieval constants below are the tuning knobs of the conversation
indexer; their defaults reproduce the behaviour chat sessions were
calibrated against and should only be changed deliberately.

Chunking
--------
``CHUNK_SIZE`` / ``CHUNK_OVERLAP`` control the sliding window over the
transcript.  ``BOUNDARY_WINDOW`` is how far (in characters) the chunker may
pull a chunk end back to land on a turn or sentence boundary.
``MAX_CHUNK_ITERATIONS`` is a hard bound on the chunking loop.

Ranking
-------
``RECENCY_WEIGHT`` is the maximum multiplicative bonus given to the last
chunk of the conversation (``score *= 1 + id / N * RECENCY_WEIGHT``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application-wide settings.

    Every field is loaded from environment variables (or ``.env``) using
    the ``CHATDEX_`` prefix, e.g. ``CHATDEX_MAX_CONTEXT_CHARS=4000``.

    Attributes
    ----------
    ENV : Literal["dev", "prod"]
        Environment mode controlling logging verbosity.
    LOG_LEVEL : Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None
        Explicit log level; overrides the level derived from ``ENV``.
    CHUNK_SIZE : int
        Target character count per transcript chunk.
    CHUNK_OVERLAP : int
        Characters shared between consecutive chunks.
    MIN_CHUNK_CHARS : int
        Trimmed chunks of this length or shorter are dropped.
    MAX_CHUNK_ITERATIONS : int
        Upper bound on chunking loop iterations for one transcript.
    BOUNDARY_WINDOW : int
        Size of the backward search window for chunk boundaries.
    TOP_K : int
        Default number of chunks returned by a search.
    MAX_CONTEXT_CHARS : int
        Character budget of the assembled context string.
    RECENCY_WEIGHT : float
        Maximum recency bonus applied to chunk scores.
    INDEX_MIN_MESSAGES : int
        A session re-indexes only when its history holds more messages than this.
    CONTEXT_MIN_MESSAGES : int
        A session retrieves context only when its history holds more messages than this.
    RECENT_MESSAGE_WINDOW : int
        Number of prior messages sent verbatim alongside the system prompt.
    """

    # ── Environment Mode ───────────────────────────────────────────────
    ENV: Literal["dev", "prod"] = "dev"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None

    # ── Chunking Parameters ────────────────────────────────────────────
    CHUNK_SIZE: int = 800
    CHUNK_OVERLAP: int = 150
    MIN_CHUNK_CHARS: int = 30
    MAX_CHUNK_ITERATIONS: int = 5000
    BOUNDARY_WINDOW: int = 100

    # ── Retrieval Parameters ───────────────────────────────────────────
    TOP_K: int = 4
    MAX_CONTEXT_CHARS: int = 3000
    RECENCY_WEIGHT: float = 0.3

    # ── Session Behaviour ──────────────────────────────────────────────
    INDEX_MIN_MESSAGES: int = 2
    CONTEXT_MIN_MESSAGES: int = 4
    RECENT_MESSAGE_WINDOW: int = 5

    # ── Validators ─────────────────────────────────────────────────────

    @field_validator("CHUNK_SIZE")
    @classmethod
    def _chunk_size_positive(cls, v: int) -> int:
        if v < 100:
            raise ValueError(f"CHUNK_SIZE must be ≥ 100, got {v}")
        return v


    @field_validator("CHUNK_OVERLAP", "MIN_CHUNK_CHARS", "BOUNDARY_WINDOW", "INDEX_MIN_MESSAGES", "CONTEXT_MIN_MESSAGES", "RECENT_MESSAGE_WINDOW")
    @classmethod
    def _non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"value must be ≥ 0, got {v}")
        return v


    @field_validator("MAX_CHUNK_ITERATIONS", "TOP_K", "MAX_CONTEXT_CHARS")
    @classmethod
    def _strictly_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"value must be ≥ 1, got {v}")
        return v


    @field_validator("RECENCY_WEIGHT")
    @classmethod
    def _recency_range(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"RECENCY_WEIGHT must be 0.0–1.0, got {v}")
        return v


    @model_validator(mode="after")
    def _window_fits_chunk(self) -> Settings:
        if self.CHUNK_OVERLAP >= self.CHUNK_SIZE:
            raise ValueError(f"CHUNK_OVERLAP ({self.CHUNK_OVERLAP}) must be smaller than CHUNK_SIZE ({self.CHUNK_SIZE})")
        if self.BOUNDARY_WINDOW > self.CHUNK_SIZE:
            raise ValueError(f"BOUNDARY_WINDOW ({self.BOUNDARY_WINDOW}) must not exceed CHUNK_SIZE ({self.CHUNK_SIZE})")
        return self

    # ── Pydantic Settings Configuration ────────────────────────────────
    model_config = SettingsConfigDict(env_prefix="CHATDEX_", env_file=Path(__file__).resolve().parent.parent / ".env", env_file_encoding="utf-8", extra="ignore")


# ── Shared Instance ────────────────────────────────────────────────────
# Import this throughout the project:
#     from chatdex.config.settings import settings
settings = Settings()

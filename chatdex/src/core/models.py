"""
chatdex - Core Models
======================
Typed records shared by the indexer and the chat session.

``Role``
    Closed two-variant enumeration of message authors.  Anything other
    than ``"user"`` or ``"assistant"`` is rejected when a ``ChatMessage``
    is built.

``ChatMessage``
    One conversation turn as supplied by the chat session.

``Chunk``
    A contiguous, bounded slice of the conversation transcript; the unit
    of retrieval.  Chunks are frozen once created.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"

    @property
    def label(self) -> str:
        """Transcript label, e.g. ``USER`` in ``[USER]: hello``."""
        return self.name


class ChatMessage(BaseModel):
    """A single conversation turn."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str

    def to_transcript(self) -> str:
        return f"[{self.role.label}]: {self.content}"

    def to_payload(self) -> dict[str, str]:
        """Plain ``{role, content}`` dict as expected by chat-completion APIs."""
        return {"role": self.role.value, "content": self.content}


class Chunk(BaseModel):
    """
    Indexed slice of a transcript.

    Attributes
    ----------
    id : int
        0-based position among the chunks kept for one transcript.
    text : str
        Whitespace-trimmed slice text.
    start, end : int
        Offsets of the untrimmed slice ``transcript[start:end]``.
    keywords : dict[str, int]
        Term frequencies of ``text``.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)
    text: str
    start: int = Field(ge=0)
    end: int
    keywords: dict[str, int] = Field(default_factory=dict)

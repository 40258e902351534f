"""
chatdex - ChatSession
======================
In-memory chat session that owns a ``ChatIndexer`` and turns the running
conversation into a chat-completion payload.

Flow for each question (``build_messages``):
    1. Refresh the index from the history *before* the question, once the
       conversation (question included) holds more than
       ``INDEX_MIN_MESSAGES`` messages.
    2. Retrieve context once it holds more than ``CONTEXT_MIN_MESSAGES``.
    3. Record the question.
    4. Build ``system prompt (+ retrieved history) → recent turns → question``.

Sending the payload, rendering, and durable storage belong to the caller.

Usage:
    from chatdex.src.core.session import ChatSession
    session  = ChatSession()
    payload  = session.build_messages("How do lifetimes work?")
    # ... call the completion API with ``payload`` ...
    session.add_message(Role.ASSISTANT, answer)
"""

from __future__ import annotations

from chatdex.config.prompt_templates import RAG_CONTEXT_TEMPLATE, SYSTEM_PROMPT
from chatdex.config.settings import Settings, settings as default_settings
from chatdex.src.core.chat_indexer import ChatIndexer
from chatdex.src.core.models import ChatMessage, Role
from chatdex.src.utils.logger import get_logger

logger = get_logger(__name__, tag="SESSION")

# ── Type aliases ───────────────────────────────────────────────────────
PayloadMessage = dict[str, str]


class ChatSession:
    """
    One conversation and its retrieval index.

    Parameters
    ----------
    config
        Settings providing session thresholds (and, through the default
        indexer, retrieval constants).
    indexer
        Optional custom ``ChatIndexer``.  Each session should own its own.
    system_prompt
        Base system prompt.  Defaults to ``SYSTEM_PROMPT``.
    """

    __slots__ = ("_indexer", "_messages", "_system_prompt", "_index_min", "_context_min", "_recent_window")

    def __init__(self, config: Settings | None = None, indexer: ChatIndexer | None = None, system_prompt: str = SYSTEM_PROMPT) -> None:
        config = config or default_settings
        self._indexer = indexer or ChatIndexer(config)
        self._messages: list[ChatMessage] = []
        self._system_prompt = system_prompt
        self._index_min = config.INDEX_MIN_MESSAGES
        self._context_min = config.CONTEXT_MIN_MESSAGES
        self._recent_window = config.RECENT_MESSAGE_WINDOW


    @property
    def indexer(self) -> ChatIndexer:
        return self._indexer


    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)


    def add_message(self, role: Role | str, content: str) -> ChatMessage:
        """Append a turn; a role outside ``Role`` raises ``ValidationError``."""
        message = ChatMessage(role=role, content=content)
        self._messages.append(message)
        return message


    def prepare_context(self, question: str) -> str:
        """
        Refresh the index and return retrieved history for *question*.

        Must be called before *question* is recorded: the index only ever
        covers earlier turns.
        """
        history = self._messages
        # Thresholds count the pending question as part of the conversation.
        total = len(history) + 1
        if total > self._index_min:
            self._indexer.index_conversation(history)

        if total <= self._context_min:
            return ""

        context = self._indexer.get_context_for_query(question)
        logger.info("Retrieved %d chars of history for a %d-message conversation.", len(context), len(history))
        return context


    def build_system_prompt(self, rag_context: str = "") -> str:
        if not rag_context:
            return self._system_prompt
        return self._system_prompt + RAG_CONTEXT_TEMPLATE.format(context=rag_context)


    def build_messages(self, question: str) -> list[PayloadMessage]:
        """
        Record *question* and return the chat-completion payload for it.

        Returns
        -------
        list[PayloadMessage]
            ``[system, *recent prior turns, user question]`` as plain
            ``{"role", "content"}`` dicts.
        """
        rag_context = self.prepare_context(question)
        self.add_message(Role.USER, question)

        prior = self._messages[:-1]
        recent = prior[-self._recent_window:] if self._recent_window else []

        return [
            {"role": "system", "content": self.build_system_prompt(rag_context)},
            *(message.to_payload() for message in recent),
            {"role": Role.USER.value, "content": question},
        ]


    def reset(self) -> None:
        """Start a new conversation: forget history and drop the index."""
        self._messages.clear()
        self._indexer.clear()
        logger.info("Session reset.")


    def __repr__(self) -> str:
        return f"ChatSession(messages={len(self._messages)}, indexer={self._indexer!r})"

"""Shared fixtures for the chatdex test suite."""

from __future__ import annotations

import pytest

from chatdex.config.settings import Settings
from chatdex.src.core.models import Chunk

_GARDENING = (
    "I have been planning a vegetable garden for the spring season and want advice on layout. "
    "The plot gets full sun in the morning but the afternoon shade from the oak tree is strong. "
    "Tomatoes, peppers and squash are on the list, along with a few herbs near the kitchen door. "
    "Raised beds seem easier to weed, although building them costs more than tilling the soil. "
    "Compost from the kitchen scraps should be ready by March if the pile keeps warm enough. "
    "Watering on weekdays is tricky because everyone leaves early, so drip lines sound appealing. "
    "Last year the slugs destroyed most lettuce seedlings before they could grow past a few leaves. "
)

_RUST = (
    "Rust manages memory through a system of ownership with rules that the compiler checks. "
    "Each value in Rust has a single owner, and when the owner goes out of scope the value is dropped. "
    "Borrowing lets code reference data without taking ownership, and the borrow checker enforces that references never outlive their data. "
    "Rust distinguishes shared references from mutable references, allowing many readers or exactly one writer at a time. "
    "Lifetimes annotate how long references remain valid so the compiler can prove safety without a garbage collector. "
    "Because these checks happen at compile time, Rust programs avoid data races and dangling pointers with zero runtime cost. "
    "Smart pointers such as Box, Rc and RefCell extend the model when single ownership is too restrictive, and Rust keeps them explicit. "
    "Moving a value transfers ownership, while cloning creates an independent deep copy that the new owner controls. "
    "Together these rules give predictable performance and memory safety in large codebases."
)

_TRAVEL = (
    "Thanks for that. Switching topics, I am also organising a family trip to the coast in August. "
    "We need a cottage close to the beach with parking for two cars and space for the grandparents. "
    "The children want to try sailing lessons, and my partner hopes to find quiet hiking trails nearby. "
    "Train tickets are cheaper if booked early, but luggage for six people makes driving tempting. "
    "Could you suggest a packing checklist that covers rainy days as well as sunny afternoons? "
    "Restaurants in the harbour town fill up quickly, so reservations might be worth making now. "
    "Finally, what activities work for toddlers when the weather turns cold and windy by the sea? "
)


@pytest.fixture
def rust_conversation() -> list[dict[str, str]]:
    """Three turns; only the assistant turn mentions Rust (five times)."""
    return [
        {"role": "user", "content": _GARDENING},
        {"role": "assistant", "content": _RUST},
        {"role": "user", "content": _TRAVEL},
    ]


@pytest.fixture
def small_settings() -> Settings:
    """Settings with a small window so short conversations span several chunks."""
    return Settings(CHUNK_SIZE=120, CHUNK_OVERLAP=20, BOUNDARY_WINDOW=40)


@pytest.fixture
def make_chunk():
    """Factory for hand-built chunks laid out in id order."""

    def _make(chunk_id: int, keywords: dict[str, int], text: str | None = None) -> Chunk:
        body = text if text is not None else f"chunk {chunk_id} " + "x" * 40
        return Chunk(id=chunk_id, text=body, start=chunk_id * 100, end=chunk_id * 100 + len(body), keywords=keywords)

    return _make

import math

import pytest

from chatdex.config.settings import Settings
from chatdex.src.core.inverted_index import build_index
from chatdex.src.core.scorer import TfIdfScorer


@pytest.fixture
def scorer() -> TfIdfScorer:
    return TfIdfScorer(Settings())


@pytest.fixture
def snapshot(make_chunk):
    return build_index([
        make_chunk(0, {"rust": 2, "ownership": 1}),
        make_chunk(1, {"python": 1, "garbage": 1}),
        make_chunk(2, {"rust": 1, "python": 1}),
    ])


def test_tfidf_scores_with_recency_boost(scorer, snapshot):
    scores = scorer.score_chunks(snapshot, "rust ownership")

    expected_first = 2 * math.log(3 / 2) + 1 * math.log(3 / 1)
    expected_last = 1 * math.log(3 / 2) * (1 + (2 / 3) * 0.3)
    assert scores == {0: pytest.approx(expected_first), 2: pytest.approx(expected_last)}


def test_query_term_frequency_multiplies_score(scorer, snapshot):
    once = scorer.score_chunks(snapshot, "ownership")
    twice = scorer.score_chunks(snapshot, "ownership ownership")
    assert twice[0] == pytest.approx(2 * once[0])


def test_rank_orders_by_score_then_returns_document_order(scorer, make_chunk):
    snapshot = build_index([
        make_chunk(0, {"rust": 1}),
        make_chunk(1, {"other": 1}),
        make_chunk(2, {"rust": 3}),
    ])
    assert [c.id for c in scorer.rank(snapshot, "rust", top_k=1)] == [2]
    assert [c.id for c in scorer.rank(snapshot, "rust", top_k=4)] == [0, 2]


def test_chunks_without_query_terms_are_excluded(scorer, snapshot):
    assert [c.id for c in scorer.rank(snapshot, "garbage collector")] == [1]


def test_term_in_every_chunk_scores_zero(scorer, make_chunk):
    snapshot = build_index([make_chunk(i, {"shared": 1}) for i in range(3)])
    assert scorer.score_chunks(snapshot, "shared") == {}
    assert scorer.rank(snapshot, "shared") == []


def test_unknown_terms_match_nothing(scorer, snapshot):
    assert scorer.rank(snapshot, "kubernetes deployment") == []


def test_ties_break_on_lower_chunk_id(make_chunk):
    scorer = TfIdfScorer(Settings(RECENCY_WEIGHT=0.0))
    snapshot = build_index([
        make_chunk(0, {"alpha": 1}),
        make_chunk(1, {"alpha": 1}),
        make_chunk(2, {"beta": 1}),
    ])
    scores = scorer.score_chunks(snapshot, "alpha")
    assert scores[0] == scores[1]
    assert [c.id for c in scorer.rank(snapshot, "alpha", top_k=1)] == [0]


def test_recency_boost_favours_later_chunks(scorer, make_chunk):
    snapshot = build_index([
        make_chunk(0, {"alpha": 1}),
        make_chunk(1, {"alpha": 1}),
        make_chunk(2, {"beta": 1}),
    ])
    scores = scorer.score_chunks(snapshot, "alpha")
    assert scores[1] / scores[0] == pytest.approx(1 + (1 / 3) * 0.3)
    assert [c.id for c in scorer.rank(snapshot, "alpha", top_k=1)] == [1]


def test_keywordless_query_returns_most_recent_chunks(scorer, snapshot):
    assert [c.id for c in scorer.rank(snapshot, "what is this?", top_k=2)] == [1, 2]
    assert [c.id for c in scorer.rank(snapshot, "", top_k=10)] == [0, 1, 2]


def test_empty_snapshot_and_non_positive_top_k(scorer, snapshot):
    assert scorer.rank(build_index([]), "rust") == []
    assert scorer.rank(snapshot, "rust", top_k=0) == []
    assert scorer.rank(snapshot, "what is this", top_k=0) == []


def test_default_top_k_comes_from_settings(make_chunk):
    scorer = TfIdfScorer(Settings(TOP_K=2))
    snapshot = build_index([make_chunk(i, {"alpha": 1}) for i in range(5)] + [make_chunk(5, {"beta": 1})])
    assert scorer.default_top_k == 2
    assert [c.id for c in scorer.rank(snapshot, "alpha")] == [3, 4]

from collections import Counter

from chatdex.src.utils.text_utils import STOP_WORDS, extract_keywords, tokenize


def test_extract_keywords_counts_case_insensitively():
    keywords = extract_keywords("The Rust borrow checker, the RUST compiler")
    assert keywords == Counter({"rust": 2, "borrow": 1, "checker": 1, "compiler": 1})


def test_short_tokens_are_dropped():
    assert extract_keywords("go to ai ml now") == Counter({"now": 1})


def test_numeric_tokens_are_dropped_but_mixed_kept():
    assert extract_keywords("version 2024 and v2 and py311") == Counter({"version": 1, "py311": 1})


def test_punctuation_splits_tokens():
    assert tokenize("don't stop-words!") == ["don", "stop", "words"]


def test_non_ascii_letters_become_separators():
    assert tokenize("café") == ["caf"]


def test_only_stop_words_yields_nothing():
    assert extract_keywords("what is this and how would they") == Counter()


def test_empty_text():
    assert extract_keywords("") == Counter()


def test_stop_word_list_is_closed_english_set():
    assert {"the", "and", "between", "below"} <= STOP_WORDS
    assert 70 <= len(STOP_WORDS) <= 100
    assert isinstance(STOP_WORDS, frozenset)

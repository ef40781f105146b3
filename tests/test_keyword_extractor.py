# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-29
# Description: test_keyword_extractor.py
# -----------------------------------------------------------------------------
from matching.KeywordExtractor import extract_keywords, jaccard_similarity, normalize_text


def test_extract_keywords_drops_stop_words_and_short_tokens():
    kw = extract_keywords("How would you design a URL shortener? Is it fast?")
    assert kw == {"design", "url", "shortener", "fast"}


def test_extract_keywords_strips_punctuation_and_lowercases():
    assert extract_keywords("Hash-Maps, TRIES; and (graphs)!") == {"hashmaps", "tries", "graphs"}


def test_extract_keywords_empty_text():
    assert extract_keywords("") == set()
    assert extract_keywords("a an of to") == set()


def test_normalize_text_ignores_case_punctuation_and_spacing():
    assert normalize_text("  Explain   hash maps.") == normalize_text("explain hash\tmaps")
    assert normalize_text("Explain  hash maps!") == "explain hash maps"
    assert normalize_text("Reverse a list") != normalize_text("Reverse a tree")


def test_normalize_text_keeps_word_boundaries():
    assert normalize_text("a bc d") != normalize_text("ab cd")
    assert normalize_text("Explain hash maps") != normalize_text("explain hashmaps")


def test_jaccard_similarity():
    assert jaccard_similarity({"a", "b"}, {"b", "c"}) == 1 / 3
    assert jaccard_similarity({"x"}, {"x"}) == 1.0
    assert jaccard_similarity(set(), set()) == 0.0

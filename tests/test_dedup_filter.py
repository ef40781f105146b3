# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-30
# Description: test_dedup_filter.py
# -----------------------------------------------------------------------------
import pytest

from corpus.SearchResult import SearchResult
from fakes import make_record
from matching.DedupFilter import DedupFilter
from matching.MatchClassifier import MatchType


def _hit(record_id, text, match_type=MatchType.EXACT, similarity=None):
    return SearchResult(record=make_record(record_id, raw_text=text), match_type=match_type, similarity=similarity)


def test_exact_duplicate_text_is_dropped():
    results = [
        _hit("a", "Explain hash maps"),
        _hit("b", "  explain   HASH maps!"),
    ]
    kept = DedupFilter().dedup(results)
    assert [r.record.id for r in kept] == ["a"]


def test_near_duplicates_above_threshold_are_dropped():
    results = [
        _hit("a", "Design a distributed rate limiter service"),
        _hit("b", "Design a distributed rate limiter"),
        _hit("c", "Reverse a linked list in place"),
    ]
    kept = DedupFilter(threshold=0.5).dedup(results)
    assert [r.record.id for r in kept] == ["a", "c"]


def test_higher_tier_wins_over_earlier_lower_tier():
    results = [
        _hit("role", "Explain hash maps", MatchType.ROLE),
        _hit("exact", "Explain hash maps", MatchType.EXACT),
    ]
    kept = DedupFilter().dedup(results)
    assert [r.record.id for r in kept] == ["exact"]


def test_order_inside_a_tier_is_preserved():
    results = [
        _hit("c1", "Reverse a linked list", MatchType.COMPANY),
        _hit("e1", "Design a cache", MatchType.EXACT),
        _hit("c2", "Explain consistent hashing", MatchType.COMPANY),
    ]
    kept = DedupFilter().dedup(results)
    assert [r.record.id for r in kept] == ["e1", "c1", "c2"]


def test_results_without_keywords_are_not_near_duplicates():
    results = [_hit("a", "Is it?"), _hit("b", "Or it?")]
    assert len(DedupFilter().dedup(results)) == 2


def test_threshold_must_be_a_fraction():
    with pytest.raises(ValueError):
        DedupFilter(threshold=1.5)

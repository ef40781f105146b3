# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-30
# Description: test_match_classifier.py
# -----------------------------------------------------------------------------
import pytest

from fakes import make_record
from matching.MatchClassifier import MatchClassifier, MatchType, role_words_overlap


@pytest.mark.parametrize(
    "company, role, expected",
    [
        ("Google", "Software Engineer", MatchType.EXACT),
        ("Google", "Product Manager", MatchType.COMPANY),
        ("Meta", "ML Engineer", MatchType.ROLE),
        ("Meta", "Product Manager", None),
    ],
)
def test_classify_company_and_role_filters(company, role, expected):
    classifier = MatchClassifier("google", "engineer")
    assert classifier.classify(make_record("q", company=company, role=role)) is expected


def test_classify_is_case_insensitive_substring():
    classifier = MatchClassifier("GOOG", "SOFTWARE")
    record = make_record("q", company="Google LLC", role="senior software engineer")
    assert classifier.classify(record) is MatchType.EXACT


def test_role_word_overlap_counts_as_role_match():
    classifier = MatchClassifier(role_filter="data engineer")
    record = make_record("q", company="Acme", role="Data-Scientist")
    assert classifier.classify(record) is MatchType.ROLE


def test_company_only_filter():
    classifier = MatchClassifier(company_filter="Google")
    assert classifier.classify(make_record("q", company="Google")) is MatchType.COMPANY
    assert classifier.classify(make_record("q", company="Meta")) is None


def test_no_filters_labels_everything_exact():
    classifier = MatchClassifier("  ", None)
    assert not classifier.has_filters
    assert classifier.classify(make_record("q")) is MatchType.EXACT


def test_role_words_overlap_ignores_short_words():
    assert role_words_overlap("ml engineer", "Backend Engineer")
    assert not role_words_overlap("ml", "ML Engineer")
    assert not role_words_overlap("designer", "Engineer")


def test_priority_order():
    assert MatchType.EXACT.priority < MatchType.COMPANY.priority < MatchType.ROLE.priority


def test_google_engineer_examples():
    classifier = MatchClassifier("Google", "engineer")
    assert classifier.classify(make_record("a", company="Google LLC", role="Software Engineer")) is MatchType.EXACT
    assert classifier.classify(make_record("b", company="Google LLC", role="Recruiter")) is MatchType.COMPANY
    assert classifier.classify(make_record("c", company="Meta", role="ML Engineer")) is MatchType.ROLE

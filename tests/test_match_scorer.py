"""Tests for the deterministic match score."""

from __future__ import annotations

import pytest

from cv_screener.ranking.match_scorer import annotate_score, score_candidate
from cv_screener.schemas.candidate import FilterCriteria


def test_no_criteria_scores_zero(make_record) -> None:
    assert score_candidate(make_record(), FilterCriteria()) == 0


@pytest.mark.parametrize("years", [3, 7])
def test_range_boundaries_get_full_experience_term(make_record, years: float) -> None:
    criteria = FilterCriteria(min_experience=3, max_experience=7)
    assert score_candidate(make_record(years=years), criteria) == 50


def test_below_min_penalty(make_record) -> None:
    assert score_candidate(make_record(years=2), FilterCriteria(min_experience=5)) == 35
    assert score_candidate(make_record(years=0), FilterCriteria(min_experience=20)) == 0


def test_above_max_penalty(make_record) -> None:
    assert score_candidate(make_record(years=12), FilterCriteria(max_experience=10)) == 44


def test_only_max_set_uses_zero_minimum(make_record) -> None:
    assert score_candidate(make_record(years=0), FilterCriteria(max_experience=10)) == 50


def test_skill_coverage_is_substring_and_case_insensitive(make_record) -> None:
    record = make_record(years=5, skills=["Python 3", "PostgreSQL", "Docker"])
    criteria = FilterCriteria(min_experience=0, max_experience=10, skills=["python", "sql", "rust"])
    # 50 + 40 * 2/3 = 76.67
    assert score_candidate(record, criteria) == 77


def test_keyword_in_summary_or_skills(make_record) -> None:
    record = make_record(skills=["Kubernetes"], summary="Led the payments platform team.")
    assert score_candidate(record, FilterCriteria(search_query="PAYMENTS")) == 10
    assert score_candidate(record, FilterCriteria(search_query="kube")) == 10
    assert score_candidate(record, FilterCriteria(search_query="golang")) == 0


def test_full_match_is_capped_at_100(make_record) -> None:
    record = make_record(years=5, skills=["Python", "SQL"], summary="Python developer")
    criteria = FilterCriteria(min_experience=1, max_experience=10, skills=["Python", "SQL"], search_query="python")
    assert score_candidate(record, criteria) == 100


def test_score_always_within_bounds(make_record) -> None:
    records = [
        make_record(years=y, skills=s)
        for y in (0, 0.5, 4, 15, 60)
        for s in ([], ["Go"], ["Python", "SQL", "AWS"])
    ]
    criteria_list = [
        FilterCriteria(),
        FilterCriteria(min_experience=10, max_experience=12, skills=["go", "python"]),
        FilterCriteria(min_experience=0, max_experience=1, skills=["x"], search_query="sql"),
        FilterCriteria(min_experience=50, skills=["Python", "SQL", "AWS"], search_query="backend"),
    ]
    for record in records:
        for criteria in criteria_list:
            assert 0 <= score_candidate(record, criteria) <= 100


def test_score_ignores_skill_order(make_record) -> None:
    criteria = FilterCriteria(skills=["aws", "python"], search_query="sql")
    a = make_record(skills=["Python", "SQL", "AWS"])
    b = make_record(skills=["AWS", "Python", "SQL"])
    assert score_candidate(a, criteria) == score_candidate(b, criteria)


def test_annotate_returns_copy(make_record) -> None:
    record = make_record(years=5)
    scored = annotate_score(record, FilterCriteria(min_experience=1, max_experience=10))
    assert scored.match_score == 50
    assert record.match_score is None
    assert scored.id == record.id

"""Filter and rank candidates. No UI logic; used by app layer."""

from typing import List

from cv_screener.config import EXPERIENCE_FILTER_CEILING
from cv_screener.ranking.match_scorer import annotate_score
from cv_screener.schemas.candidate import CandidateRecord, FilterCriteria
from cv_screener.utils.helpers import contains_ci


def _experience_filter_active(criteria: FilterCriteria) -> bool:
    return (criteria.min_experience or 0) > 0 or (
        criteria.max_experience is not None and criteria.max_experience < EXPERIENCE_FILTER_CEILING
    )


def _matches_any_skill(record: CandidateRecord, skills: List[str]) -> bool:
    return any(contains_ci(own, wanted) for wanted in skills for own in record.skills)


def _matches_query(record: CandidateRecord, query: str) -> bool:
    if contains_ci(record.name, query) or contains_ci(record.summary, query):
        return True
    if any(contains_ci(s, query) for s in record.skills):
        return True
    return any(
        contains_ci(c.company_name, query) or contains_ci(c.position, query)
        for c in record.companies
    )


def filter_candidates(
    records: List[CandidateRecord],
    criteria: FilterCriteria,
) -> List[CandidateRecord]:
    """
    Filter candidates by criteria. Does not mutate the input list.
    Experience range applies only when narrowed from the default 0..ceiling window.
    Skills keep candidates matching ANY requested skill; the search query matches
    name, summary, skills, company names and positions.
    """
    result = list(records)
    if _experience_filter_active(criteria):
        low = criteria.min_experience or 0
        high = criteria.max_experience if criteria.max_experience is not None else EXPERIENCE_FILTER_CEILING
        result = [r for r in result if low <= r.years_of_experience <= high]
    if criteria.skills:
        result = [r for r in result if _matches_any_skill(r, criteria.skills)]
    if criteria.search_query:
        result = [r for r in result if _matches_query(r, criteria.search_query)]
    return result


def rank_candidates(
    records: List[CandidateRecord],
    criteria: FilterCriteria,
) -> List[CandidateRecord]:
    """Filter, attach match scores to copies, and sort highest score first (stable)."""
    scored = [annotate_score(r, criteria) for r in filter_candidates(records, criteria)]
    return sorted(scored, key=lambda r: r.match_score or 0, reverse=True)


def available_skills(records: List[CandidateRecord]) -> List[str]:
    """Sorted unique skills across all candidates (case preserved)."""
    return sorted({s for r in records for s in r.skills})

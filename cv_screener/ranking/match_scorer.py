"""Match scoring: experience range + skill coverage + keyword hit, 0-100. Used for ordering only."""

import math

from cv_screener.schemas.candidate import CandidateRecord, FilterCriteria
from cv_screener.utils.helpers import contains_ci

# Weights for final score
WEIGHT_EXPERIENCE = 50
WEIGHT_SKILLS = 40
WEIGHT_KEYWORD = 10

# Points lost per year outside the requested range
BELOW_MIN_PENALTY = 5
ABOVE_MAX_PENALTY = 3

DEFAULT_MIN_EXPERIENCE = 0.0
DEFAULT_MAX_EXPERIENCE = 100.0


def _experience_score(years: float, criteria: FilterCriteria) -> float:
    if criteria.min_experience is None and criteria.max_experience is None:
        return 0.0
    low = criteria.min_experience if criteria.min_experience is not None else DEFAULT_MIN_EXPERIENCE
    high = criteria.max_experience if criteria.max_experience is not None else DEFAULT_MAX_EXPERIENCE
    if low <= years <= high:
        return float(WEIGHT_EXPERIENCE)
    if years < low:
        return max(0.0, WEIGHT_EXPERIENCE - BELOW_MIN_PENALTY * (low - years))
    return max(0.0, WEIGHT_EXPERIENCE - ABOVE_MAX_PENALTY * (years - high))


def _skills_score(record: CandidateRecord, criteria: FilterCriteria) -> float:
    """Share of requested skills contained (case-insensitive substring) in any candidate skill."""
    if not criteria.skills:
        return 0.0
    matched = sum(
        1 for wanted in criteria.skills
        if any(contains_ci(skill, wanted) for skill in record.skills)
    )
    return WEIGHT_SKILLS * matched / len(criteria.skills)


def _keyword_score(record: CandidateRecord, criteria: FilterCriteria) -> float:
    query = criteria.search_query
    if not query:
        return 0.0
    if contains_ci(record.summary, query) or any(contains_ci(s, query) for s in record.skills):
        return float(WEIGHT_KEYWORD)
    return 0.0


def score_candidate(record: CandidateRecord, criteria: FilterCriteria) -> int:
    """Deterministic 0-100 match score; never mutates the record."""
    total = (
        _experience_score(record.years_of_experience, criteria)
        + _skills_score(record, criteria)
        + _keyword_score(record, criteria)
    )
    return int(min(100, max(0, math.floor(total + 0.5))))


def annotate_score(record: CandidateRecord, criteria: FilterCriteria) -> CandidateRecord:
    """Copy of the record carrying match_score for the current ranking request."""
    return record.model_copy(update={"match_score": score_candidate(record, criteria)})

"""Ranking: deterministic candidate match scoring."""

from cv_screener.ranking.match_scorer import annotate_score, score_candidate

__all__ = ["score_candidate", "annotate_score"]

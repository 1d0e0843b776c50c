"""Service exports."""

from .export_service import export_csv
from .filter_service import available_skills, filter_candidates, rank_candidates

__all__ = [
    "filter_candidates",
    "rank_candidates",
    "available_skills",
    "export_csv",
]

"""Utility exports."""

from .duration import format_years, total_company_years, years_from_duration
from .helpers import contains_ci, extract_emails
from .logger import get_logger

__all__ = [
    "get_logger",
    "extract_emails",
    "contains_ci",
    "years_from_duration",
    "format_years",
    "total_company_years",
]

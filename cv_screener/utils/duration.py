"""Convert free-text employment durations into years of experience."""

import math
import re
from datetime import date
from typing import Iterable, Optional

MONTHS = [
    "jan", "feb", "mar", "apr", "may", "jun",
    "jul", "aug", "sep", "oct", "nov", "dec",
]

_DASH = r"[-–—]"

_YEARS_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:year|yr)", re.IGNORECASE)
_MONTHS_RE = re.compile(r"(\d+)\s*(?:month|mo)", re.IGNORECASE)
_ONGOING_RE = re.compile(r"\b(?:present|current|now)\b", re.IGNORECASE)
_MONTH_YEAR_START_RE = re.compile(rf"([A-Za-z]+)\s*(\d{{4}})\s*{_DASH}")
_YEAR_START_RE = re.compile(rf"(\d{{4}})\s*{_DASH}")
_NUMERIC_RANGE_RE = re.compile(
    rf"(\d{{1,2}})\s*/\s*(\d{{4}})\s*{_DASH}\s*(\d{{1,2}})\s*/\s*(\d{{4}})"
)
_YEAR_RANGE_RE = re.compile(rf"(?:^|\D)(\d{{4}})\s*{_DASH}\s*(\d{{4}})(?:\D|$)")
_MONTH_YEAR_RANGE_RE = re.compile(
    rf"([A-Za-z]+)\s*(\d{{4}})\s*{_DASH}\s*([A-Za-z]+)\s*(\d{{4}})"
)


def _round1(value: float) -> float:
    """Round half-up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def month_number(token: str) -> Optional[int]:
    """1-12 for a month name matched on its 3-letter prefix, else None."""
    prefix = (token or "").lower()[:3]
    if prefix in MONTHS:
        return MONTHS.index(prefix) + 1
    return None


def years_from_duration(text: str, now: Optional[date] = None) -> float:
    """
    Estimate the years covered by a duration string.
    Handles: "2 years", "3.5 yrs", "18 months", "Jan 2020 - Present", "2020 - Current",
    "07/2024 - 06/2025", "2020-2022", "Jan 2020 - Dec 2022".
    Patterns are tried in that order; the first match wins. Returns 0 when nothing matches.
    """
    if not text or text.strip() == "N/A":
        return 0.0

    today = now or date.today()

    # ---- Explicit: "3 years", "2.5 yr" ----
    m = _YEARS_RE.search(text)
    if m:
        return float(m.group(1))

    # ---- Explicit: "18 months", "6 mo" ----
    m = _MONTHS_RE.search(text)
    if m:
        return _round1(int(m.group(1)) / 12)

    # ---- Open-ended: "Jan 2020 - Present", "2019 - now" ----
    if _ONGOING_RE.search(text):
        m = _MONTH_YEAR_START_RE.search(text)
        if m:
            start_year = int(m.group(2))
            start_month = month_number(m.group(1))
            if start_month is not None:
                elapsed = (today.year - start_year) + (today.month - start_month) / 12
                return max(0.0, _round1(elapsed))
            return float(max(0, today.year - start_year))

        m = _YEAR_START_RE.search(text)
        if m:
            return float(max(0, today.year - int(m.group(1))))

    # ---- Numeric: "07/2024 - 06/2025" ----
    m = _NUMERIC_RANGE_RE.search(text)
    if m:
        start_month, start_year, end_month, end_year = (int(g) for g in m.groups())
        total_months = (end_year - start_year) * 12 + (end_month - start_month)
        return max(0.0, total_months / 12)

    # ---- Years only: "2020-2022" ----
    m = _YEAR_RANGE_RE.search(text)
    if m:
        return float(max(0, int(m.group(2)) - int(m.group(1))))

    # ---- Month names: "Jan 2020 - Dec 2022" ----
    m = _MONTH_YEAR_RANGE_RE.search(text)
    if m:
        year_diff = int(m.group(4)) - int(m.group(2))
        start_month = month_number(m.group(1))
        end_month = month_number(m.group(3))
        if start_month is not None and end_month is not None:
            return _round1(year_diff + (end_month - start_month) / 12)
        return float(year_diff)

    return 0.0


def format_years(years: float) -> str:
    """Display label: "N/A" for zero, months below a year, else whole years."""
    if years == 0:
        return "N/A"
    total_months = math.floor(years * 12 + 0.5)
    if total_months < 12:
        return f"{total_months} month"
    return f"{math.floor(years)} year"


def total_company_years(companies: Iterable, now: Optional[date] = None) -> float:
    """Sum of the per-employment duration view for a candidate's companies."""
    total = sum(years_from_duration(c.duration_text, now=now) for c in companies)
    return _round1(total)

"""Helper utilities for the CV screener."""

import re
from typing import List

_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")


def extract_emails(text: str) -> List[str]:
    """Extract email addresses from text using regex."""
    if not text:
        return []
    return list(dict.fromkeys(_EMAIL_RE.findall(text)))


def contains_ci(haystack: str, needle: str) -> bool:
    """Case-insensitive substring test."""
    return (needle or "").lower() in (haystack or "").lower()

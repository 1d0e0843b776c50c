"""Export candidate records to CSV. Read-only consumer of finished records."""

import csv
import io
from typing import List

from cv_screener.schemas.candidate import CandidateRecord, Employment

CSV_HEADERS = [
    "name", "email", "phone", "years_of_experience", "skills", "companies",
    "summary", "source_file_name", "match_score",
]


def _company_label(c: Employment) -> str:
    return f"{c.position} @ {c.company_name} ({c.duration_text})"


def export_csv(records: List[CandidateRecord]) -> bytes:
    """Export candidates to CSV bytes."""
    out = io.StringIO()
    writer = csv.writer(out)
    writer.writerow(CSV_HEADERS)
    for r in records:
        row = [
            r.name,
            r.email or "",
            r.phone or "",
            r.years_of_experience,
            "; ".join(r.skills),
            "; ".join(_company_label(c) for c in r.companies),
            r.summary[:500],
            r.source_file_name,
            r.match_score if r.match_score is not None else "",
        ]
        writer.writerow(row)
    return out.getvalue().encode("utf-8")

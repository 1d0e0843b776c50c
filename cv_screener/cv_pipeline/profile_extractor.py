"""LLM-based extraction of a structured candidate record from raw CV text."""

import json
import math
import re
from typing import Any, List, Optional

from cv_screener.config import (
    DEFAULT_SUMMARY,
    MAX_PROMPT_CHARS,
    UNKNOWN_COMPANY,
    UNKNOWN_DURATION,
    UNKNOWN_NAME,
    UNKNOWN_POSITION,
)
from cv_screener.exceptions import ParseFailed
from cv_screener.generation.generation_service import TextGenerator
from cv_screener.schemas.candidate import CandidateRecord, Employment
from cv_screener.utils.helpers import extract_emails
from cv_screener.utils.logger import get_logger

logger = get_logger(__name__)

CV_PROFILE_PROMPT = """You are an expert CV/Resume parser. Analyze the following CV text and extract structured information.

Return a JSON object with the following structure (and nothing else, just the raw JSON):
{{
  "name": "Full name of the candidate",
  "email": "Email address if found, or null",
  "phone": "Phone number if found, or null",
  "yearsOfExperience": <number>,
  "skills": ["skill1", "skill2"],
  "companies": [
    {{
      "name": "Company name",
      "position": "Job title",
      "duration": "Duration worked, as written in the CV (e.g. 'Jan 2020 - Present')",
      "achievements": ["achievement1"]
    }}
  ],
  "summary": "A brief 2-3 sentence summary"
}}

Rules:
- Return ONLY valid JSON
- No markdown, no code block
- No explanations
- Do NOT invent data; use null or empty arrays when information is missing
- Estimate conservatively if unclear
- List companies most recent first

CV TEXT:
\"\"\"
{cv_text}
\"\"\"
"""

_ABSENT_MARKERS = {"null", "none", "n/a", "not found", "unknown"}


def build_profile_prompt(cv_text: str) -> str:
    return CV_PROFILE_PROMPT.format(cv_text=cv_text[:MAX_PROMPT_CHARS])


def _strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` block if present."""
    raw = (text or "").strip()
    if raw.startswith("```"):
        raw = re.sub(r"^```(?:json)?\s*", "", raw, flags=re.IGNORECASE)
        raw = re.sub(r"\s*```$", "", raw)
    return raw


def _first_json_object(text: str) -> Optional[str]:
    """Return the first balanced top-level {...} span, ignoring braces inside strings."""
    start = text.find("{")
    if start == -1:
        return None
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def parse_model_json(text: str) -> dict:
    """
    Recover a JSON object from a model response: strip code fences, then fall back
    to the first balanced {...} span. Raises ParseFailed with the raw response attached.
    """
    raw = _strip_code_fences(text)
    try:
        parsed = json.loads(raw)
        if isinstance(parsed, dict):
            return parsed
    except json.JSONDecodeError:
        logger.debug("Response is not bare JSON; trying brace matching")

    span = _first_json_object(raw)
    if span is not None:
        try:
            parsed = json.loads(span)
            if isinstance(parsed, dict):
                return parsed
        except json.JSONDecodeError as e:
            logger.debug("Brace-matched span is not valid JSON: %s", e)

    raise ParseFailed("Failed to parse CV content: model response is not a JSON object", raw_response=text)


def _clean_str(value: Any) -> Optional[str]:
    """Non-empty string or None; placeholder values like "null" count as absent."""
    if value is None or isinstance(value, (bool, dict, list)):
        return None
    s = str(value).strip()
    if not s or s.lower() in _ABSENT_MARKERS:
        return None
    return s


def _clean_str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _coerce_years(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        years = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(years):
        return 0.0
    return max(0.0, years)


def _coerce_company(entry: dict) -> Employment:
    achievements = entry.get("achievements")
    return Employment(
        company_name=_clean_str(entry.get("name")) or _clean_str(entry.get("company")) or UNKNOWN_COMPANY,
        position=_clean_str(entry.get("position")) or _clean_str(entry.get("title")) or UNKNOWN_POSITION,
        duration_text=_clean_str(entry.get("duration")) or UNKNOWN_DURATION,
        achievements=_clean_str_list(achievements) if isinstance(achievements, list) else None,
    )


def coerce_record(parsed: dict, text: str, file_name: str) -> CandidateRecord:
    """Map parsed model output onto a CandidateRecord; every field gets a deterministic default."""
    companies = parsed.get("companies")
    if isinstance(companies, list):
        employment = [_coerce_company(c) for c in companies if isinstance(c, dict)]
    else:
        employment = []

    email = _clean_str(parsed.get("email"))
    if email is None:
        found = extract_emails(text)
        email = found[0] if found else None

    return CandidateRecord(
        source_file_name=file_name,
        name=_clean_str(parsed.get("name")) or UNKNOWN_NAME,
        email=email,
        phone=_clean_str(parsed.get("phone")),
        years_of_experience=_coerce_years(parsed.get("yearsOfExperience")),
        skills=_clean_str_list(parsed.get("skills")),
        companies=employment,
        summary=_clean_str(parsed.get("summary")) or DEFAULT_SUMMARY,
        raw_text=text,
    )


async def extract_profile(text: str, file_name: str, generator: TextGenerator) -> CandidateRecord:
    """
    Call the model once for this document and turn its answer into a CandidateRecord.
    Raises ParseFailed when the response is empty or holds no recoverable JSON object.
    """
    response = await generator.generate(build_profile_prompt(text))
    if not response or not response.strip():
        raise ParseFailed("Empty response from model", raw_response=response)
    parsed = parse_model_json(response)
    record = coerce_record(parsed, text, file_name)
    logger.info(
        "Extracted profile for %s: name=%s skills=%s companies=%s",
        file_name, record.name, len(record.skills), len(record.companies),
    )
    return record

"""Structured candidate record produced by the CV pipeline."""

from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from cv_screener.config import (
    DEFAULT_SUMMARY,
    UNKNOWN_COMPANY,
    UNKNOWN_DURATION,
    UNKNOWN_NAME,
    UNKNOWN_POSITION,
)


def _new_id() -> str:
    return str(uuid4())


class Employment(BaseModel):
    """One company entry; duration_text stays as extracted (years are derived on demand)."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    company_name: str = Field(default=UNKNOWN_COMPANY, description="Company or employer name")
    position: str = Field(default=UNKNOWN_POSITION, description="Job title held")
    duration_text: str = Field(
        default=UNKNOWN_DURATION,
        description="Free-form duration (e.g. 'Jan 2020 - Present', '2 years', '07/2024-06/2025')",
    )
    achievements: Optional[List[str]] = Field(default=None, description="Notable achievements, if listed")


class CandidateRecord(BaseModel):
    """Canonical candidate profile; immutable once extracted."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=_new_id, description="Unique id generated at extraction time")
    source_file_name: str = Field(..., description="Original upload name, verbatim")
    name: str = Field(default=UNKNOWN_NAME, description="Candidate full name")
    email: Optional[str] = Field(default=None, description="Email address if found")
    phone: Optional[str] = Field(default=None, description="Phone number if found")
    years_of_experience: float = Field(default=0.0, description="Model-estimated total years of experience")
    skills: List[str] = Field(default_factory=list, description="Skills, case preserved as extracted")
    companies: List[Employment] = Field(default_factory=list, description="Employment history in model order")
    summary: str = Field(default=DEFAULT_SUMMARY, description="Short profile summary")
    raw_text: str = Field(default="", description="Full extracted document text")
    match_score: Optional[int] = Field(default=None, description="Transient ranking score (0-100)")
    # Kept for "download original CV"; never serialized
    original_file: Optional[bytes] = Field(default=None, exclude=True, description="Uploaded file bytes")
    file_type: Optional[str] = Field(default=None, exclude=True, description="MIME type of the uploaded file")

    @field_validator("name")
    @classmethod
    def _name_fallback(cls, v: str) -> str:
        return v if v and v.strip() else UNKNOWN_NAME

    @field_validator("summary")
    @classmethod
    def _summary_fallback(cls, v: str) -> str:
        return v if v and v.strip() else DEFAULT_SUMMARY

    @field_validator("years_of_experience")
    @classmethod
    def _non_negative(cls, v: float) -> float:
        return max(0.0, v)

    def to_payload(self) -> dict:
        """camelCase dict for the presentation layer; absent optionals are omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class FilterCriteria(BaseModel):
    """Caller-supplied ranking/filter criteria."""

    min_experience: Optional[float] = Field(default=None, description="Minimum years of experience")
    max_experience: Optional[float] = Field(default=None, description="Maximum years of experience")
    skills: List[str] = Field(default_factory=list, description="Requested skills")
    search_query: str = Field(default="", description="Free-text keyword")

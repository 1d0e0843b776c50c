"""Upload batch input/output schemas."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cv_screener.schemas.candidate import CandidateRecord


class UploadedFile(BaseModel):
    """One file handed over by the upload transport."""

    file_name: str = Field(..., description="Original file name")
    content: bytes = Field(..., description="Raw file bytes")


class FileError(BaseModel):
    """Per-file failure reported alongside the successful records."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_name: str = Field(..., description="File that failed")
    error: str = Field(..., description="Human-readable failure message")
    code: str = Field(..., description="Error kind, e.g. UnsupportedFormat, ParseFailed")


class BatchResult(BaseModel):
    """Aggregated outcome of one batch."""

    records: List[CandidateRecord] = Field(default_factory=list)
    errors: List[FileError] = Field(default_factory=list)
    total_count: int = Field(default=0, description="Files submitted")

    @property
    def processed_count(self) -> int:
        return len(self.records)


class BatchResponse(BaseModel):
    """Batch result contract returned to the presentation layer."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    data: Optional[List[CandidateRecord]] = None
    errors: Optional[List[FileError]] = None
    processed_count: Optional[int] = None
    total_count: Optional[int] = None
    error: Optional[str] = Field(default=None, description="Request-level failure message")

    @classmethod
    def from_result(cls, result: BatchResult) -> "BatchResponse":
        return cls(
            success=True,
            data=result.records,
            errors=result.errors or None,
            processed_count=result.processed_count,
            total_count=result.total_count,
        )

    @classmethod
    def failure(cls, message: str) -> "BatchResponse":
        return cls(success=False, error=message)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)

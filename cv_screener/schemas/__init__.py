"""Schema exports."""

from .batch import BatchResponse, BatchResult, FileError, UploadedFile
from .candidate import CandidateRecord, Employment, FilterCriteria

__all__ = [
    "CandidateRecord",
    "Employment",
    "FilterCriteria",
    "UploadedFile",
    "FileError",
    "BatchResult",
    "BatchResponse",
]

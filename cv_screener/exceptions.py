"""Error taxonomy for the CV pipeline.

Per-file errors (UnsupportedFormat, ExtractionFailed, TooShort, ParseFailed) are
caught by the batch processor and reported next to the file name. Request-level
errors (ProviderConfigError, NoFilesProvided) abort the whole upload.
"""

from typing import Optional


class CVPipelineError(Exception):
    """Base class; ``code`` is the name reported to callers."""

    code = "PipelineError"


class UnsupportedFormat(CVPipelineError):
    code = "UnsupportedFormat"

    def __init__(self, file_name: str, extension: str) -> None:
        self.file_name = file_name
        self.extension = extension
        super().__init__(
            f"Unsupported file type '{extension or '(none)'}'. Supported: PDF, DOCX, DOC, TXT"
        )


class ExtractionFailed(CVPipelineError):
    code = "ExtractionFailed"

    def __init__(self, file_name: str, cause: Exception) -> None:
        self.file_name = file_name
        self.cause = cause
        super().__init__(f"Failed to extract text from {file_name}: {cause}")


class TooShort(CVPipelineError):
    code = "TooShort"

    def __init__(self, file_name: str, length: int, minimum: int) -> None:
        self.file_name = file_name
        self.length = length
        self.minimum = minimum
        super().__init__(
            f"File content is too short or empty ({length} chars, minimum {minimum})"
        )


class ParseFailed(CVPipelineError):
    """Model output could not be turned into a candidate record."""

    code = "ParseFailed"

    def __init__(self, message: str, raw_response: Optional[str] = None) -> None:
        self.raw_response = raw_response
        super().__init__(message)


class ProviderConfigError(CVPipelineError):
    code = "ProviderConfigError"


class NoFilesProvided(CVPipelineError):
    code = "NoFilesProvided"

    def __init__(self) -> None:
        super().__init__("No files uploaded")

"""Batch processing: extract text and profiles for an uploaded file set with per-file isolation."""

import asyncio
import mimetypes
from typing import Iterable, List, Optional, Tuple

import openai

from cv_screener.config import (
    EXTRACTION_CONCURRENCY,
    FILE_TIMEOUT_SECONDS,
    MIN_TEXT_LENGTH,
    MODEL_MAX_RETRIES,
    MODEL_RETRY_BACKOFF_SECONDS,
)
from cv_screener.cv_pipeline.profile_extractor import extract_profile
from cv_screener.cv_pipeline.text_extractor import extract_text, get_file_extension, is_supported_file
from cv_screener.exceptions import (
    CVPipelineError,
    NoFilesProvided,
    ProviderConfigError,
    TooShort,
    UnsupportedFormat,
)
from cv_screener.generation.generation_service import TextGenerator, get_default_generator
from cv_screener.schemas.batch import BatchResponse, BatchResult, FileError, UploadedFile
from cv_screener.schemas.candidate import CandidateRecord
from cv_screener.utils.logger import get_logger

logger = get_logger(__name__)

# APITimeoutError is a subclass of APIConnectionError
_TRANSIENT_PROVIDER_ERRORS = (openai.APIConnectionError, openai.RateLimitError)

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

Outcome = Tuple[Optional[CandidateRecord], Optional[FileError]]


async def _extract_with_retries(text: str, file_name: str, generator: TextGenerator) -> CandidateRecord:
    """Structured extraction, retrying transient provider failures with linear backoff."""
    attempt = 0
    while True:
        try:
            return await extract_profile(text, file_name, generator)
        except _TRANSIENT_PROVIDER_ERRORS as e:
            if attempt >= MODEL_MAX_RETRIES:
                raise
            attempt += 1
            logger.warning("Model call failed for %s (attempt %s): %s", file_name, attempt, e)
            await asyncio.sleep(MODEL_RETRY_BACKOFF_SECONDS * attempt)


def guess_file_type(file_name: str) -> str:
    """MIME type from the file extension, octet-stream when unknown."""
    mime, _ = mimetypes.guess_type(file_name)
    if mime is None and get_file_extension(file_name) == "docx":
        mime = DOCX_MIME_TYPE
    return mime or "application/octet-stream"


async def _run_file(file: UploadedFile, generator: TextGenerator, progress: dict) -> CandidateRecord:
    progress["stage"] = "validate"
    if not is_supported_file(file.file_name):
        raise UnsupportedFormat(file.file_name, get_file_extension(file.file_name))

    progress["stage"] = "extract_text"
    text = await asyncio.to_thread(extract_text, file.content, file.file_name)

    progress["stage"] = "length_gate"
    length = len((text or "").strip())
    if length < MIN_TEXT_LENGTH:
        raise TooShort(file.file_name, length, MIN_TEXT_LENGTH)

    progress["stage"] = "extract_profile"
    record = await _extract_with_retries(text, file.file_name, generator)
    return record.model_copy(update={"original_file": file.content, "file_type": guess_file_type(file.file_name)})


async def _process_one(file: UploadedFile, generator: TextGenerator, sem: asyncio.Semaphore) -> Outcome:
    """Run one file end to end; any per-file failure becomes a FileError."""
    progress = {"stage": "queued"}
    async with sem:
        try:
            record = await asyncio.wait_for(_run_file(file, generator, progress), timeout=FILE_TIMEOUT_SECONDS)
            return record, None
        except ProviderConfigError:
            raise
        except CVPipelineError as e:
            logger.warning("File %s failed at %s [%s]: %s", file.file_name, progress["stage"], e.code, e)
            if getattr(e, "raw_response", None):
                logger.debug("Raw model response for %s: %s", file.file_name, e.raw_response)
            return None, FileError(file_name=file.file_name, error=str(e), code=e.code)
        except asyncio.TimeoutError:
            message = f"Processing timed out after {FILE_TIMEOUT_SECONDS:g}s"
            logger.warning("File %s timed out at %s", file.file_name, progress["stage"])
            return None, FileError(file_name=file.file_name, error=message, code="Timeout")
        except openai.APIError as e:
            logger.error("Model provider error for %s at %s: %s", file.file_name, progress["stage"], e)
            return None, FileError(file_name=file.file_name, error=f"Model provider error: {e}", code="ProviderError")
        except Exception as e:
            logger.exception("Unexpected error processing %s at %s", file.file_name, progress["stage"])
            return None, FileError(file_name=file.file_name, error=str(e) or type(e).__name__, code="InternalError")


async def process_batch(
    files: Iterable[UploadedFile],
    generator: Optional[TextGenerator] = None,
) -> BatchResult:
    """
    Process an uploaded file set: validate, extract text, length-gate, extract profile.
    Files run concurrently (bounded by EXTRACTION_CONCURRENCY); one file's failure never
    aborts the batch. Raises NoFilesProvided for an empty set and ProviderConfigError when
    the model client cannot be configured.
    """
    files = list(files)
    if not files:
        raise NoFilesProvided()
    if generator is None:
        generator = get_default_generator()

    sem = asyncio.Semaphore(EXTRACTION_CONCURRENCY)
    outcomes = await asyncio.gather(*[_process_one(f, generator, sem) for f in files])

    records: List[CandidateRecord] = [r for r, _ in outcomes if r is not None]
    errors: List[FileError] = [e for _, e in outcomes if e is not None]
    result = BatchResult(records=records, errors=errors, total_count=len(files))
    logger.info(
        "Batch finished: processed=%s total=%s errors=%s",
        result.processed_count, result.total_count, len(errors),
    )
    return result


def run_batch(
    files: Iterable[UploadedFile],
    generator: Optional[TextGenerator] = None,
) -> BatchResult:
    """
    Synchronous wrapper around process_batch.
    Uses its own event loop; safe to call from sync context (e.g. Streamlit).
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(process_batch(files, generator))
    finally:
        loop.close()


def handle_upload(
    files: Iterable[UploadedFile],
    generator: Optional[TextGenerator] = None,
) -> BatchResponse:
    """Upload boundary: request-level failures become success=False responses."""
    try:
        result = run_batch(files, generator)
    except (NoFilesProvided, ProviderConfigError) as e:
        logger.error("Upload rejected [%s]: %s", e.code, e)
        return BatchResponse.failure(str(e))
    except Exception as e:
        logger.exception("Upload processing failed")
        return BatchResponse.failure(str(e) or "Internal server error")
    return BatchResponse.from_result(result)

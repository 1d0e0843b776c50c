"""CV upload pipeline: text extraction (PDF/DOCX/TXT), LLM profile extraction, batch processing."""

from cv_screener.cv_pipeline.batch_processor import handle_upload, process_batch, run_batch
from cv_screener.cv_pipeline.profile_extractor import extract_profile, parse_model_json
from cv_screener.cv_pipeline.text_extractor import extract_text, is_supported_file

__all__ = [
    "extract_text",
    "is_supported_file",
    "extract_profile",
    "parse_model_json",
    "process_batch",
    "run_batch",
    "handle_upload",
]

"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env

# Model provider – never hardcode keys. GROQ_API_KEY works with OPENAI_BASE_URL pointed at Groq.
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "") or os.getenv("GROQ_API_KEY", "")
OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "")
MODEL_NAME: str = os.getenv("MODEL_NAME", "gpt-4o-mini")
MODEL_TEMPERATURE: float = 0.0

# Batch processing
EXTRACTION_CONCURRENCY: int = int(os.getenv("EXTRACTION_CONCURRENCY", "5"))  # Max in-flight model calls per batch
FILE_TIMEOUT_SECONDS: float = float(os.getenv("FILE_TIMEOUT_SECONDS", "90"))
MODEL_MAX_RETRIES: int = int(os.getenv("MODEL_MAX_RETRIES", "2"))
MODEL_RETRY_BACKOFF_SECONDS: float = 1.0

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Document gating
SUPPORTED_EXTENSIONS: tuple = ("pdf", "docx", "doc", "txt")
MIN_TEXT_LENGTH: int = 50
MAX_PROMPT_CHARS: int = 20000  # Prompt only; rawText keeps the full document

# Record defaults
UNKNOWN_NAME: str = "Unknown"
UNKNOWN_COMPANY: str = "Unknown Company"
UNKNOWN_POSITION: str = "Unknown Position"
UNKNOWN_DURATION: str = "N/A"
DEFAULT_SUMMARY: str = "No summary available"

# Filter panel: experience range only filters when narrowed below these bounds
EXPERIENCE_FILTER_CEILING: float = 50.0

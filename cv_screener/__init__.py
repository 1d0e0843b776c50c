"""CV Screener: résumé text extraction, LLM profile extraction and candidate ranking."""

__version__ = "0.1.0"

"""Scraper package: render, isolate, normalize and persist page text."""

from textscraper.scraper.extractor import isolate_text
from textscraper.scraper.filters import is_code_line, normalize_lines
from textscraper.scraper.models import ExtractionResult, FailureRecord, RunSummary
from textscraper.scraper.pipeline import process_url, run_pipeline
from textscraper.scraper.session import PageSession, open_session

__all__ = [
    "isolate_text",
    "is_code_line",
    "normalize_lines",
    "process_url",
    "run_pipeline",
    "open_session",
    "PageSession",
    "ExtractionResult",
    "FailureRecord",
    "RunSummary",
]

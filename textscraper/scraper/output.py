"""Writing per-page CSV files and the consolidated failure log."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, Sequence
from urllib.parse import urlparse

from textscraper.scraper.models import FailureRecord

CSV_HEADER = "Extracted Text"


def slug_for_url(url: str) -> str:
    """Turn the URL path into a filename-safe slug.

    ``/about/team`` becomes ``about_team``; an empty path becomes ``homepage``.
    """
    slug = urlparse(url).path.replace("/", "_").strip("_")
    return slug or "homepage"


def output_path(output_dir: Path, prefix: str, url: str) -> Path:
    """Return ``<output_dir>/<prefix>_<slug>_content.csv`` for *url*."""
    return Path(output_dir) / f"{prefix}_{slug_for_url(url)}_content.csv"


def write_csv(path: Path, lines: Iterable[str], include_bom: bool = False) -> Path:
    """Write a single-column CSV with every field quoted.

    A UTF-8 byte-order marker is prepended when *include_bom* is set so that
    spreadsheet applications detect the encoding.
    """
    encoding = "utf-8-sig" if include_bom else "utf-8"
    with open(path, "w", encoding=encoding, newline="") as fh:
        writer = csv.writer(fh, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow([CSV_HEADER])
        for line in lines:
            writer.writerow([line])
    return Path(path)


def format_failure_log(failures: Sequence[FailureRecord]) -> str:
    parts = [f"Failed to scrape {len(failures)} URL(s):", ""]
    for failure in failures:
        parts.append(f"URL: {failure.url}")
        parts.append(f"Reason: {failure.reason}")
        parts.append("")
    return "\n".join(parts)


def write_failure_log(path: Path, failures: Sequence[FailureRecord]) -> Path | None:
    """Write *failures* to *path* in occurrence order.

    Returns ``None`` without touching the filesystem when there are no failures.
    """
    if not failures:
        return None
    Path(path).write_text(format_failure_log(failures), encoding="utf-8")
    return Path(path)

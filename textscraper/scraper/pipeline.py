"""Per-URL scraping pipeline and the sequential run loop.

For each URL:

    navigate → stabilize → expand → isolate → normalize → write CSV

Every stage receives the same injected :class:`~textscraper.scraper.session.PageSession`;
nothing is kept between URLs except the list of failures.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from playwright.sync_api import Error as PlaywrightError

from textscraper.config import ScrapeProfile, settings
from textscraper.scraper.extractor import isolate_text
from textscraper.scraper.filters import normalize_lines
from textscraper.scraper.interact import expand_interactive, stabilize_page
from textscraper.scraper.models import (
    NO_CONTAINER,
    NO_TEXT,
    ExtractionResult,
    FailureRecord,
    RunSummary,
)
from textscraper.scraper.output import output_path, write_csv, write_failure_log
from textscraper.scraper.session import PageSession

logger = logging.getLogger(__name__)

PageOutcome = Union[ExtractionResult, FailureRecord]


def process_url(
    session: PageSession,
    url: str,
    profile: ScrapeProfile,
) -> PageOutcome:
    """Run the extraction pipeline for a single *url*.

    Navigation errors keep Playwright's own message as the failure reason.
    Nothing is retried.
    """
    try:
        session.goto(url)
    except PlaywrightError as exc:
        logger.warning("Failed to access %s: %s", url, exc)
        return FailureRecord(url=url, reason=str(exc))

    try:
        if profile.stabilize:
            stabilize_page(session)
        if profile.expand_interactive:
            stats = expand_interactive(session)
            if stats.failed:
                logger.info("%d interaction(s) failed on %s", stats.failed, url)

        found = session.container_html(profile.container_selectors)
    except PlaywrightError as exc:
        logger.warning("Page error on %s: %s", url, exc)
        return FailureRecord(url=url, reason=str(exc))

    if found is None:
        logger.warning("No content container on %s", url)
        return FailureRecord(url=url, reason=NO_CONTAINER)

    selector, html = found
    logger.debug("Using container %s on %s", selector, url)
    lines = normalize_lines(isolate_text(html))
    if not lines:
        logger.warning("No visible text in container on %s", url)
        return FailureRecord(url=url, reason=NO_TEXT)

    return ExtractionResult(url=url, lines=tuple(lines))


def run_pipeline(
    session: PageSession,
    targets: Sequence[str],
    profile: ScrapeProfile,
    output_dir: Path,
    prefix: str,
    failure_log: Optional[Path] = None,
    on_outcome: Optional[Callable[[PageOutcome, Optional[Path]], None]] = None,
) -> RunSummary:
    """Process *targets* one at a time and write their artifacts.

    Args:
        session: The browser page shared by every URL.
        targets: URLs in processing order.
        profile: Container selectors and stage flags.
        output_dir: Directory for CSV files (must exist).
        prefix: Filename prefix for CSV files.
        failure_log: Where to write the failure log; defaults to
            ``settings.failure_log_name`` inside *output_dir*.
        on_outcome: Optional callback invoked after each URL with its outcome
            and the CSV path (``None`` for failures).

    Returns:
        A :class:`RunSummary` of written files and failures.
    """
    summary = RunSummary()
    for url in targets:
        logger.info("Scraping %s", url)
        outcome = process_url(session, url, profile)

        written: Optional[Path] = None
        if isinstance(outcome, ExtractionResult):
            written = write_csv(
                output_path(output_dir, prefix, url),
                outcome.lines,
                include_bom=profile.include_bom,
            )
            summary.written.append(written)
            logger.info("Saved %d line(s) to %s", len(outcome.lines), written)
        else:
            summary.failures.append(outcome)

        if on_outcome is not None:
            on_outcome(outcome, written)

    log_path = failure_log or Path(output_dir) / settings.failure_log_name
    summary.failure_log = write_failure_log(log_path, summary.failures)
    return summary

"""Page stabilization and interactive-content expansion.

Dynamic layouts often populate counters, lazy images and reveal animations
only once they scroll into view, and keep accordion/tab bodies out of the DOM
until opened.  These helpers drive a :class:`~textscraper.scraper.session.PageSession`
until that content has rendered.  All waits are fixed-duration pauses.
"""

from __future__ import annotations

import logging
from typing import Sequence

from playwright.sync_api import Error as PlaywrightError

from textscraper.scraper.models import ExpansionStats
from textscraper.scraper.session import PageSession

logger = logging.getLogger(__name__)

# Collapsed accordion/toggle titles, in the order they are tried.
ACCORDION_SELECTORS: tuple[str, ...] = (
    ".elementor-accordion .elementor-tab-title",
    ".elementor-toggle .elementor-tab-title",
    ".e-n-accordion-item-title",
)

# Tab titles; desktop titles only, the mobile duplicates share the same panels.
TAB_SELECTORS: tuple[str, ...] = (
    ".elementor-tabs .elementor-tab-desktop-title",
    ".e-n-tab-title",
)


def stabilize_page(session: PageSession) -> None:
    """Scroll top to bottom in fixed steps, then return to the top.

    The scroll height is re-read on every step because lazy content grows the
    page as it loads.  ``max_scroll_steps`` bounds endlessly growing pages.
    """
    config = session.config
    position = 0
    for _ in range(config.max_scroll_steps):
        if position >= session.scroll_height():
            break
        position += config.scroll_step
        session.scroll_to(position)
        session.pause(config.scroll_interval_ms)
    else:
        logger.debug("Stopped scrolling after %d steps", config.max_scroll_steps)

    session.scroll_to(0)
    session.pause(config.settle_ms)


def expand_accordions(
    session: PageSession,
    selectors: Sequence[str] = ACCORDION_SELECTORS,
) -> ExpansionStats:
    """Click every collapsed accordion title matched by *selectors*.

    A title counts as collapsed unless it has ``aria-expanded="true"`` or an
    active class.  A failed click is counted and skipped.
    """
    stats = ExpansionStats()
    wait_ms = session.config.accordion_wait_ms
    for selector in selectors:
        for handle in session.query_all(selector):
            try:
                if session.is_expanded(handle):
                    continue
                stats.attempted += 1
                session.click(handle)
                session.pause(wait_ms)
                stats.succeeded += 1
            except PlaywrightError as exc:
                logger.debug("Accordion click failed for %s: %s", selector, exc)

    if stats.attempted:
        logger.info("Expanded %d/%d accordion(s)", stats.succeeded, stats.attempted)
    return stats


def expand_tabs(
    session: PageSession,
    selectors: Sequence[str] = TAB_SELECTORS,
) -> ExpansionStats:
    """Activate every tab matched by *selectors*, one after another.

    Activating a tab can re-render the widget, so the element list is
    re-queried before each click instead of reusing earlier handles.
    """
    stats = ExpansionStats()
    wait_ms = session.config.tab_wait_ms
    for selector in selectors:
        total = len(session.query_all(selector))
        for index in range(total):
            stats.attempted += 1
            try:
                handles = session.query_all(selector)
                if index >= len(handles):
                    logger.debug("Tab %d of %s disappeared before click", index, selector)
                    continue
                session.click(handles[index])
                session.pause(wait_ms)
                stats.succeeded += 1
            except PlaywrightError as exc:
                logger.debug("Tab click failed for %s[%d]: %s", selector, index, exc)

    if stats.attempted:
        logger.info("Activated %d/%d tab(s)", stats.succeeded, stats.attempted)
    return stats


def expand_interactive(session: PageSession) -> ExpansionStats:
    """Open accordions, then walk through tabs."""
    return expand_accordions(session) + expand_tabs(session)

"""Thin wrapper around a Playwright page.

The pipeline only talks to :class:`PageSession`, never to Playwright
directly, so tests can swap in an in-memory fake.  Playwright is imported
lazily in :func:`open_session` so the rest of the package imports without a
browser installed.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from textscraper.config import Settings, settings as default_settings

_ACTIVE_CLASSES = ("active", "elementor-active", "e-active")

_IS_EXPANDED_JS = """
(el, activeClasses) => {
    if (el.getAttribute('aria-expanded') === 'true') return true;
    return activeClasses.some((c) => el.classList.contains(c));
}
"""


class PageSession:
    """One browser tab, reused for every URL in a run."""

    def __init__(self, page: Any, config: Settings = default_settings) -> None:
        self._page = page
        self._config = config

    @property
    def config(self) -> Settings:
        return self._config

    def goto(self, url: str) -> None:
        """Navigate to *url*; raises ``playwright.sync_api.Error`` on failure."""
        self._page.goto(
            url,
            wait_until=self._config.wait_until,
            timeout=int(self._config.navigation_timeout * 1000),
        )

    def scroll_height(self) -> int:
        return int(
            self._page.evaluate(
                "() => document.body.scrollHeight || document.documentElement.scrollHeight"
            )
        )

    def scroll_to(self, y: int) -> None:
        self._page.evaluate("(y) => window.scrollTo(0, y)", y)

    def pause(self, ms: int) -> None:
        self._page.wait_for_timeout(ms)

    def query_all(self, selector: str) -> List[Any]:
        return self._page.query_selector_all(selector)

    def is_expanded(self, handle: Any) -> bool:
        """``aria-expanded="true"`` or an active class marker means open."""
        return bool(handle.evaluate(_IS_EXPANDED_JS, list(_ACTIVE_CLASSES)))

    def click(self, handle: Any) -> None:
        handle.click()

    def container_html(self, selectors: Sequence[str]) -> Optional[Tuple[str, str]]:
        """Return ``(selector, outerHTML)`` for the first selector that matches."""
        for selector in selectors:
            handle = self._page.query_selector(selector)
            if handle is not None:
                return selector, handle.evaluate("(el) => el.outerHTML")
        return None


@contextmanager
def open_session(config: Settings = default_settings) -> Iterator[PageSession]:
    """Launch headless Chromium and yield a :class:`PageSession` on one page."""
    from playwright.sync_api import sync_playwright  # noqa: PLC0415

    with sync_playwright() as pw:
        browser = pw.chromium.launch(headless=config.headless)
        try:
            page = browser.new_page()
            yield PageSession(page, config)
        finally:
            browser.close()

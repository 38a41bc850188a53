"""Shared fixtures: an in-memory stand-in for the Playwright page session.

The fake records every scroll, pause, query and click so tests can assert on
the exact interaction sequence without launching a browser.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Union

import pytest
from playwright.sync_api import Error as PlaywrightError

from textscraper.config import Settings


class FakeHandle:
    def __init__(self, name: str = "", expanded: bool = False, fail: bool = False) -> None:
        self.name = name
        self.expanded = expanded
        self.fail = fail

    def __repr__(self) -> str:
        return f"FakeHandle({self.name!r})"


ElementSource = Union[List[FakeHandle], Callable[[], List[FakeHandle]]]


class FakeSession:
    def __init__(
        self,
        pages: Optional[Dict[str, Dict[str, str]]] = None,
        elements: Optional[Dict[str, ElementSource]] = None,
        nav_errors: Optional[Dict[str, str]] = None,
        height: int = 300,
        config: Optional[Settings] = None,
    ) -> None:
        self.config = config or Settings()
        self.pages = pages or {}
        self.elements = elements or {}
        self.nav_errors = nav_errors or {}
        self.height = height
        self.current: Optional[str] = None

        self.visited: List[str] = []
        self.scrolls: List[int] = []
        self.pauses: List[int] = []
        self.queries: List[str] = []
        self.clicks: List[FakeHandle] = []

    def goto(self, url: str) -> None:
        self.visited.append(url)
        if url in self.nav_errors:
            raise PlaywrightError(self.nav_errors[url])
        self.current = url

    def scroll_height(self) -> int:
        return self.height

    def scroll_to(self, y: int) -> None:
        self.scrolls.append(y)

    def pause(self, ms: int) -> None:
        self.pauses.append(ms)

    def query_all(self, selector: str) -> List[Any]:
        self.queries.append(selector)
        source = self.elements.get(selector, [])
        return list(source() if callable(source) else source)

    def is_expanded(self, handle: FakeHandle) -> bool:
        return handle.expanded

    def click(self, handle: FakeHandle) -> None:
        if handle.fail:
            raise PlaywrightError("Element is not attached to the DOM")
        handle.expanded = True
        self.clicks.append(handle)

    def container_html(self, selectors):
        page = self.pages.get(self.current or "", {})
        for selector in selectors:
            if selector in page:
                return selector, page[selector]
        return None


@pytest.fixture
def fake_session_cls():
    return FakeSession


@pytest.fixture
def fake_handle_cls():
    return FakeHandle

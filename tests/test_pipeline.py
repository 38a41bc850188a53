"""Tests for the per-URL pipeline and the sequential run loop."""

from __future__ import annotations

from pathlib import Path

import pytest
from playwright.sync_api import Error as PlaywrightError

from textscraper.config import PROFILES, ScrapeProfile
from textscraper.scraper.interact import ACCORDION_SELECTORS
from textscraper.scraper.models import (
    NO_CONTAINER,
    NO_TEXT,
    ExtractionResult,
    FailureRecord,
)
from textscraper.scraper.pipeline import process_url, run_pipeline

_PAGE = "div[data-elementor-type='wp-page']"
_POST = "div[data-elementor-type='single-post']"

_CONTENT_HTML = """\
<div data-elementor-type="wp-page">
<h1>Welcome</h1>

<script>function foo() { return 1; }</script>
<p>function foo() {</p>
<p>Contact us</p>
</div>
"""

_CODE_ONLY_HTML = """\
<div data-elementor-type="wp-page">
<p>var x = 1</p>
<p>}</p>
</div>
"""


@pytest.fixture
def profile() -> ScrapeProfile:
    return ScrapeProfile(name="test", container_selectors=(_PAGE, _POST))


# ---------------------------------------------------------------------------
# process_url
# ---------------------------------------------------------------------------

class TestProcessUrl:
    def test_extracts_filtered_lines(self, fake_session_cls, profile) -> None:
        session = fake_session_cls(pages={"https://a.example/": {_PAGE: _CONTENT_HTML}})

        outcome = process_url(session, "https://a.example/", profile)

        assert outcome == ExtractionResult(
            url="https://a.example/", lines=("Welcome", "Contact us")
        )

    def test_falls_back_to_second_selector(self, fake_session_cls, profile) -> None:
        html = '<div data-elementor-type="single-post"><p>Post body</p></div>'
        session = fake_session_cls(pages={"https://a.example/blog/x": {_POST: html}})

        outcome = process_url(session, "https://a.example/blog/x", profile)

        assert isinstance(outcome, ExtractionResult)
        assert outcome.lines == ("Post body",)

    def test_navigation_error_keeps_raw_message(self, fake_session_cls, profile) -> None:
        session = fake_session_cls(
            nav_errors={"https://down.example/": "net::ERR_NAME_NOT_RESOLVED"}
        )

        outcome = process_url(session, "https://down.example/", profile)

        assert outcome == FailureRecord("https://down.example/", "net::ERR_NAME_NOT_RESOLVED")

    def test_missing_container(self, fake_session_cls, profile) -> None:
        session = fake_session_cls(pages={"https://a.example/": {"div.other": "<div>x</div>"}})

        outcome = process_url(session, "https://a.example/", profile)

        assert outcome == FailureRecord("https://a.example/", NO_CONTAINER)

    def test_code_only_container_has_no_text(self, fake_session_cls, profile) -> None:
        session = fake_session_cls(pages={"https://a.example/": {_PAGE: _CODE_ONLY_HTML}})

        outcome = process_url(session, "https://a.example/", profile)

        assert outcome == FailureRecord("https://a.example/", NO_TEXT)

    def test_page_error_after_navigation_is_a_failure(self, fake_session_cls, profile) -> None:
        class CrashingSession(fake_session_cls):
            def container_html(self, selectors):
                raise PlaywrightError("Target page, context or browser has been closed")

        outcome = process_url(CrashingSession(), "https://a.example/", profile)

        assert isinstance(outcome, FailureRecord)
        assert "has been closed" in outcome.reason

    def test_basic_profile_skips_scrolling_and_clicking(self, fake_session_cls, fake_handle_cls) -> None:
        session = fake_session_cls(
            pages={"https://a.example/": {"div[data-elementor-post-type='page']": "<div>Hi</div>"}},
            elements={ACCORDION_SELECTORS[0]: [fake_handle_cls("acc")]},
        )

        process_url(session, "https://a.example/", PROFILES["basic"])

        assert session.scrolls == []
        assert session.clicks == []

    def test_full_profile_stabilizes_and_expands(self, fake_session_cls, fake_handle_cls) -> None:
        session = fake_session_cls(
            pages={"https://a.example/": {_PAGE: _CONTENT_HTML}},
            elements={ACCORDION_SELECTORS[0]: [fake_handle_cls("acc")]},
            height=200,
        )
        session.config.scroll_step = 100

        outcome = process_url(session, "https://a.example/", PROFILES["full"])

        assert isinstance(outcome, ExtractionResult)
        assert session.scrolls[-1] == 0
        assert len(session.scrolls) > 1
        assert [h.name for h in session.clicks] == ["acc"]


# ---------------------------------------------------------------------------
# run_pipeline
# ---------------------------------------------------------------------------

class TestRunPipeline:
    def test_zero_targets_does_nothing(self, fake_session_cls, profile, tmp_path: Path) -> None:
        session = fake_session_cls()

        summary = run_pipeline(session, [], profile, tmp_path, "acme")

        assert session.visited == []
        assert summary.written == []
        assert summary.failure_log is None
        assert list(tmp_path.iterdir()) == []

    def test_writes_one_csv_per_success(self, fake_session_cls, profile, tmp_path: Path) -> None:
        session = fake_session_cls(pages={
            "https://a.example/": {_PAGE: _CONTENT_HTML},
            "https://a.example/about/team": {_PAGE: '<div><p>She said "hi"</p></div>'},
        })

        summary = run_pipeline(
            session,
            ["https://a.example/", "https://a.example/about/team"],
            profile,
            tmp_path,
            "acme",
        )

        assert summary.ok
        assert summary.failure_log is None
        assert summary.written == [
            tmp_path / "acme_homepage_content.csv",
            tmp_path / "acme_about_team_content.csv",
        ]
        home = (tmp_path / "acme_homepage_content.csv").read_text(encoding="utf-8")
        assert home == '"Extracted Text"\n"Welcome"\n"Contact us"\n'
        team = (tmp_path / "acme_about_team_content.csv").read_text(encoding="utf-8")
        assert '"She said ""hi"""' in team

    def test_missing_container_logs_single_failure(self, fake_session_cls, profile, tmp_path: Path) -> None:
        session = fake_session_cls(pages={"https://a.example/x": {}})

        summary = run_pipeline(session, ["https://a.example/x"], profile, tmp_path, "acme")

        assert summary.written == []
        assert summary.failures == [FailureRecord("https://a.example/x", NO_CONTAINER)]
        assert not (tmp_path / "acme_x_content.csv").exists()
        log = summary.failure_log.read_text(encoding="utf-8")
        assert log.count("URL: ") == 1
        assert f"Reason: {NO_CONTAINER}" in log

    def test_failures_do_not_stop_the_run(self, fake_session_cls, profile, tmp_path: Path) -> None:
        session = fake_session_cls(
            pages={"https://ok.example/": {_PAGE: _CONTENT_HTML}},
            nav_errors={"https://down.example/": "Timeout 10000ms exceeded."},
        )
        urls = ["https://down.example/", "https://empty.example/", "https://ok.example/"]

        summary = run_pipeline(
            session, urls, profile, tmp_path, "acme",
            failure_log=tmp_path / "errors.txt",
        )

        assert session.visited == urls
        assert [f.url for f in summary.failures] == urls[:2]
        assert [f.reason for f in summary.failures] == ["Timeout 10000ms exceeded.", NO_CONTAINER]
        assert summary.written == [tmp_path / "acme_homepage_content.csv"]
        assert summary.failure_log == tmp_path / "errors.txt"
        assert summary.failure_log.read_text(encoding="utf-8").startswith(
            "Failed to scrape 2 URL(s):"
        )

    def test_default_failure_log_uses_configured_name(
        self, fake_session_cls, profile, tmp_path: Path, monkeypatch
    ) -> None:
        monkeypatch.setattr("textscraper.config.settings.failure_log_name", "errors.log")
        session = fake_session_cls()

        summary = run_pipeline(session, ["https://a.example/"], profile, tmp_path, "acme")

        assert summary.failure_log == tmp_path / "errors.log"
        assert summary.failure_log.exists()
        assert not (tmp_path / "failed_urls.txt").exists()

    def test_bom_follows_profile(self, fake_session_cls, tmp_path: Path) -> None:
        profile = ScrapeProfile(name="t", container_selectors=(_PAGE,), include_bom=True)
        session = fake_session_cls(pages={"https://a.example/": {_PAGE: _CONTENT_HTML}})

        summary = run_pipeline(session, ["https://a.example/"], profile, tmp_path, "acme")

        assert summary.written[0].read_bytes().startswith(b"\xef\xbb\xbf")

    def test_on_outcome_is_called_per_url(self, fake_session_cls, profile, tmp_path: Path) -> None:
        session = fake_session_cls(pages={"https://a.example/": {_PAGE: _CONTENT_HTML}})
        seen = []

        run_pipeline(
            session,
            ["https://a.example/", "https://b.example/"],
            profile,
            tmp_path,
            "acme",
            on_outcome=lambda outcome, written: seen.append((outcome.url, written)),
        )

        assert seen == [
            ("https://a.example/", tmp_path / "acme_homepage_content.csv"),
            ("https://b.example/", None),
        ]

"""Centralised settings for the page text scraper.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Input / output
    # ------------------------------------------------------------------
    websites_file: Path = field(
        default_factory=lambda: Path(
            os.environ.get("SCRAPER_WEBSITES_FILE", "websites.txt")
        )
    )
    output_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("SCRAPER_OUTPUT_DIR", "scraped_text")
        )
    )
    output_prefix: str = field(
        default_factory=lambda: os.environ.get("SCRAPER_OUTPUT_PREFIX", "site")
    )
    failure_log_name: str = field(
        default_factory=lambda: os.environ.get("SCRAPER_FAILURE_LOG", "failed_urls.txt")
    )
    profile: str = field(
        default_factory=lambda: os.environ.get("SCRAPER_PROFILE", "basic")
    )

    @property
    def failure_log_path(self) -> Path:
        """Where the consolidated failure log is written, if needed."""
        return self.output_dir / self.failure_log_name

    # ------------------------------------------------------------------
    # Browser
    # ------------------------------------------------------------------
    headless: bool = field(
        default_factory=lambda: _env_bool("SCRAPER_HEADLESS", True)
    )
    navigation_timeout: float = field(
        default_factory=lambda: float(os.environ.get("SCRAPER_NAVIGATION_TIMEOUT", "10.0"))
    )
    wait_until: str = field(
        default_factory=lambda: os.environ.get("SCRAPER_WAIT_UNTIL", "domcontentloaded")
    )

    # ------------------------------------------------------------------
    # Stabilization & expansion pauses
    # ------------------------------------------------------------------
    scroll_step: int = field(
        default_factory=lambda: int(os.environ.get("SCRAPER_SCROLL_STEP", "100"))
    )
    scroll_interval_ms: int = field(
        default_factory=lambda: int(os.environ.get("SCRAPER_SCROLL_INTERVAL_MS", "100"))
    )
    max_scroll_steps: int = field(
        default_factory=lambda: int(os.environ.get("SCRAPER_MAX_SCROLL_STEPS", "2000"))
    )
    settle_ms: int = field(
        default_factory=lambda: int(os.environ.get("SCRAPER_SETTLE_MS", "1000"))
    )
    accordion_wait_ms: int = field(
        default_factory=lambda: int(os.environ.get("SCRAPER_ACCORDION_WAIT_MS", "200"))
    )
    tab_wait_ms: int = field(
        default_factory=lambda: int(os.environ.get("SCRAPER_TAB_WAIT_MS", "300"))
    )

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("SCRAPER_LOG_LEVEL", "INFO")
    )

    def ensure_output_dir(self) -> None:
        """Create the output directory if it does not exist."""
        self.output_dir.mkdir(parents=True, exist_ok=True)


# ---------------------------------------------------------------------------
# Scrape profiles
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScrapeProfile:
    """Everything that distinguishes one kind of site from another.

    ``container_selectors`` are tried in order; the first match wins.
    """

    name: str
    container_selectors: tuple[str, ...]
    stabilize: bool = False
    expand_interactive: bool = False
    include_bom: bool = False

    def with_overrides(
        self,
        *,
        include_bom: Optional[bool] = None,
        expand_interactive: Optional[bool] = None,
    ) -> ScrapeProfile:
        """Return a copy with any non-``None`` flag replaced."""
        changes = {}
        if include_bom is not None:
            changes["include_bom"] = include_bom
        if expand_interactive is not None:
            changes["expand_interactive"] = expand_interactive
        return replace(self, **changes)


PROFILES: dict[str, ScrapeProfile] = {
    "basic": ScrapeProfile(
        name="basic",
        container_selectors=(
            "div[data-elementor-post-type='page']",
            "div[data-elementor-post-type='elementor_library']",
        ),
    ),
    "full": ScrapeProfile(
        name="full",
        container_selectors=(
            "div[data-elementor-type='wp-page']",
            "div[data-elementor-type='single-post']",
        ),
        stabilize=True,
        expand_interactive=True,
        include_bom=True,
    ),
}


def get_profile(name: str) -> ScrapeProfile:
    """Look up a built-in profile by name.

    Raises:
        KeyError: If *name* is not a known profile.
    """
    try:
        return PROFILES[name]
    except KeyError:
        known = ", ".join(sorted(PROFILES))
        raise KeyError(f"Unknown profile {name!r}. Known profiles: {known}") from None


# Module-level singleton, import this everywhere:
#   from textscraper.config import settings
settings = Settings()

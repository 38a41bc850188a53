"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

NO_CONTAINER = "no matching content container"
NO_TEXT = "no visible text found"


@dataclass(frozen=True)
class ExtractionResult:
    """The filtered text lines produced for one successfully processed URL."""

    url: str
    lines: tuple[str, ...]


@dataclass(frozen=True)
class FailureRecord:
    """A URL that produced no output artifact, and why."""

    url: str
    reason: str


@dataclass
class ExpansionStats:
    """Best-effort counter for accordion/tab clicks on one page."""

    attempted: int = 0
    succeeded: int = 0

    @property
    def failed(self) -> int:
        return self.attempted - self.succeeded

    def __add__(self, other: ExpansionStats) -> ExpansionStats:
        return ExpansionStats(
            attempted=self.attempted + other.attempted,
            succeeded=self.succeeded + other.succeeded,
        )


@dataclass
class RunSummary:
    """Everything one run produced."""

    written: List[Path] = field(default_factory=list)
    failures: List[FailureRecord] = field(default_factory=list)
    failure_log: Optional[Path] = None

    @property
    def ok(self) -> bool:
        return not self.failures

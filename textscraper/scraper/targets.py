"""Loading the list of URLs to scrape."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")


def parse_targets(text: str) -> List[str]:
    """Return the URLs in *text*, one per line, in file order.

    Blank lines and lines starting with ``#`` are skipped.
    """
    targets: List[str] = []
    for line in _LINE_BREAK.split(text):
        line = line.strip()
        if line and not line.startswith("#"):
            targets.append(line)
    return targets


def load_targets(path: Path) -> List[str]:
    """Read *path* and return its URLs.

    A missing or unreadable file is treated as an empty list so the caller can
    report "nothing to scrape" instead of crashing.  Undecodable bytes are
    replaced rather than rejected, so the readable URLs are still used.
    """
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.warning("Target list %s not found or unreadable: %s", path, exc)
        return []
    return parse_targets(text)

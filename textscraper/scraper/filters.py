"""Text normalization and the "looks like program code" line filter.

Inline ``<script>`` bodies that survive isolation (templated widgets, inline
handlers rendered as text) show up as lines of JavaScript.  The classifier is
a heuristic: prose ending in a semicolon is rejected too, and that trade-off
is accepted.
"""

from __future__ import annotations

import re
from typing import List

_LINE_BREAK = re.compile(r"\r?\n")

# Evaluated in order; the first match wins and which one matched is irrelevant.
_CODE_PATTERNS: tuple[re.Pattern[str], ...] = (
    # Statement keywords at the start of the line
    re.compile(r"^(?:var|let|const|function|if|else|for|while|return|class)\s"),
    # Event binding, ready handlers, async requests
    re.compile(r"\.(?:on|off|bind|addEventListener|removeEventListener)\s*\("),
    re.compile(r"(?:\$|jQuery)\s*\(\s*(?:document|window)\s*\)\s*\.\s*(?:ready|on)\s*\("),
    re.compile(r"(?:\$|jQuery)\s*\.\s*(?:ajax|get|post|getJSON)\s*\("),
    re.compile(r"\bfetch\(|\bXMLHttpRequest\b"),
    # Logging
    re.compile(r"\bconsole\s*\.\s*(?:log|warn|error|info|debug)\s*\("),
    # DOM queries
    re.compile(
        r"\bdocument\s*\.\s*(?:getElementById|getElementsByClassName|getElementsByTagName"
        r"|querySelector|querySelectorAll|createElement)\s*\("
    ),
    # Browser globals
    re.compile(r"\b(?:window|document|navigator|localStorage|sessionStorage)\.[A-Za-z_$]"),
    # Promises and async/await
    re.compile(r"\.(?:then|catch|finally)\s*\(|\bnew\s+Promise\s*\("),
    re.compile(r"\basync\s+(?:function\b|\()|\bawait\s+[\w$.]+\s*\("),
    # A lone brace
    re.compile(r"^[{}]$"),
    # Statement terminator
    re.compile(r";$"),
)


def is_code_line(line: str) -> bool:
    """Return ``True`` if *line* looks like a line of JavaScript."""
    return any(pattern.search(line) for pattern in _CODE_PATTERNS)


def normalize_lines(text: str) -> List[str]:
    """Split *text* into trimmed, non-empty, non-code lines, in order."""
    lines: List[str] = []
    for raw in _LINE_BREAK.split(text):
        line = raw.strip()
        if line and not is_code_line(line):
            lines.append(line)
    return lines

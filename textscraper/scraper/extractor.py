"""Content isolation: turns a container's HTML into one block of text."""

from __future__ import annotations

from bs4 import BeautifulSoup

_NON_CONTENT_TAGS = ["script", "style", "noscript"]

_CHROME_SELECTORS = ", ".join([
    "header",
    "footer",
    "[role='banner']",
    "[role='contentinfo']",
    ".header",
    ".footer",
    ".site-header",
    ".site-footer",
    ".elementor-location-header",
    ".elementor-location-footer",
    "#header",
    "#footer",
    "#masthead",
    "#colophon",
])

# Hidden on desktop, tablet and mobile at once: never shown to anyone.
_HIDDEN_EVERYWHERE = (
    ".elementor-hidden-desktop.elementor-hidden-tablet.elementor-hidden-mobile"
)


def isolate_text(container_html: str) -> str:
    """Strip non-content subtrees from *container_html* and return its text.

    The result matches DOM ``textContent`` (plus a line break per ``<br>``)
    rather than rendered text: panels hidden only by CSS (closed tabs,
    collapsed toggles) keep their text.
    Only the container's descendants are removed, never the container itself.
    """
    soup = BeautifulSoup(container_html, "html.parser")
    root = soup.find(True)
    if root is None:
        return ""

    for tag in root.find_all(_NON_CONTENT_TAGS):
        tag.extract()
    for tag in root.select(_CHROME_SELECTORS):
        tag.extract()
    for tag in root.select(_HIDDEN_EVERYWHERE):
        tag.extract()
    # <br> has no text node of its own; keep the break it renders as.
    for br in root.find_all("br"):
        br.replace_with("\n")

    return root.get_text()

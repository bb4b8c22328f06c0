"""
Turns the provider's HTML report into plain text for the PDF download.

The model answers with HTML, usually wrapped in a ```html ... ``` code fence.
`strip_html_tags` drops style/script blocks and all tags, removes the fence
markers and squeezes redundant whitespace. Parsing is lenient: it never raises
for string input.
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

logger = logging.getLogger(__name__)

OPENING_FENCE = "```html"
CLOSING_FENCE = "```"

_HORIZONTAL_RUN = re.compile(r"[ \t]{2,}")
_BLANK_LINES = re.compile(r"\n{3,}")
_SCRIPT_STYLE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.S | re.I)
_TAG = re.compile(r"<[^>]*>")


def strip_fence_markers(text: Optional[str]) -> str:
    """Remove every ```html / ``` marker, wherever it occurs."""
    if not text:
        return ""
    return text.replace(OPENING_FENCE, "").replace(CLOSING_FENCE, "")


def _parse(html: str) -> Optional[BeautifulSoup]:
    try:
        return BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup:
        return None


def _visible_text(html: str) -> str:
    soup = _parse(html)
    if soup is None:
        # Rejections come from markup declarations; parse them as text
        logger.warning("HTML parser rejected report markup; retrying with declarations escaped")
        soup = _parse(html.replace("<!", "&lt;!"))
    if soup is None:
        logger.warning("HTML parser rejected report markup; falling back to tag stripping")
        return _TAG.sub("", _SCRIPT_STYLE.sub("", html))
    for el in soup(["style", "script"]):
        el.decompose()
    return soup.get_text()


def _strip_once(html: str) -> str:
    text = _visible_text(html)
    text = strip_fence_markers(text)
    text = _HORIZONTAL_RUN.sub(" ", text)
    text = _BLANK_LINES.sub("\n\n", text)
    return text.strip()


def strip_html_tags(html: Optional[str]) -> str:
    """
    Plain-text version of a generated report.

    Repeats the cleaning pass until the text is stable, so entity-encoded
    markup in the report (``&lt;b&gt;``, ``&amp;lt;b&amp;gt;``) cannot survive
    as tags and strip_html_tags(strip_html_tags(x)) == strip_html_tags(x).
    A pass never lengthens the text, so the loop ends.
    """
    if not html:
        return ""
    text = _strip_once(html)
    while True:
        again = _strip_once(text)
        if again == text:
            return text
        text = again

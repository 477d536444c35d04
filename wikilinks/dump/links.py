"""Link extraction from wiki markup.

``extract_links`` scans body text for ``[[...]]`` spans and turns each one
into a clean link target, or drops it.  The scan is deliberately naive: spans
do not nest, and the first ``]]`` after an opening ``[[`` closes the span no
matter what sits in between.
"""

from __future__ import annotations

import re
from typing import List

MAX_LINKS_PER_PAGE = 15

OPEN_MARKER = "[["
CLOSE_MARKER = "]]"

# Namespaces for images and categories (German and English dumps).
RESERVED_PREFIXES = ("Bild:", "Kategorie:", "Image:")

_NUMERIC = re.compile(r"\d+", re.ASCII)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _clean_target(inner: str) -> str | None:
    """Apply the filter chain to the inner text of one span.

    Returns the cleaned target, or ``None`` if the span is not an article link.
    """
    # [[Target|shown label]] -> Target
    target = inner.split("|", 1)[0]

    # Bare numbers, mostly years like [[1972]]
    if _NUMERIC.fullmatch(target):
        return None
    if target.startswith(RESERVED_PREFIXES):
        return None
    # Same-page anchor
    if target.startswith("#"):
        return None

    # Flugzeug#Flugsteuerung -> Flugzeug
    target = target.split("#", 1)[0]
    target = target.replace("_", " ")

    # Interlanguage links (en:Foo) and any other namespace
    if ":" in target:
        return None
    return target


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_links(text: str, max_links: int = MAX_LINKS_PER_PAGE) -> List[str]:
    """Return the link targets found in *text*, in first-occurrence order.

    At most *max_links* targets are returned.  Scanning stops as soon as the
    limit is reached, so later spans are never looked at.

    Example::

        >>> extract_links("See [[Foo|the foo]], [[1972]] and [[A_B#Top]].")
        ['Foo', 'A B']
    """
    links: List[str] = []
    if max_links <= 0:
        return links

    pos = 0
    while True:
        start = text.find(OPEN_MARKER, pos)
        if start == -1:
            break
        inner_start = start + len(OPEN_MARKER)
        end = text.find(CLOSE_MARKER, inner_start)
        if end == -1:
            break
        pos = end + len(CLOSE_MARKER)

        target = _clean_target(text[inner_start:end])
        if target is None:
            continue
        links.append(target)
        if len(links) >= max_links:
            break
    return links

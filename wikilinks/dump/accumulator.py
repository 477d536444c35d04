"""Per-document state machine that turns structural events into records.

The accumulator only cares about two fields, ``title`` and ``text``.  Every
other element start or end resets it to :attr:`FieldState.NONE`, and
character data seen in that state is dropped.

Usage::

    acc = PageAccumulator()
    for event in events:
        for record in acc.handle(event):
            sink.write(record)
"""

from __future__ import annotations

import enum
from typing import List

from wikilinks.dump.links import MAX_LINKS_PER_PAGE, extract_links
from wikilinks.dump.models import (
    Characters,
    Event,
    FieldClose,
    FieldOpen,
    Link,
    Page,
    Record,
)

TITLE_FIELD = "title"
BODY_FIELD = "text"


class FieldState(enum.Enum):
    NONE = "none"
    IN_TITLE = "in_title"
    IN_BODY = "in_body"


class PageAccumulator:
    """Buffers title/body text for the page being read and emits records.

    One instance covers exactly one document run: it owns the page counter,
    so ids stay sequential only as long as the same instance is fed every
    event of the document in order.
    """

    def __init__(self, max_links: int = MAX_LINKS_PER_PAGE) -> None:
        self.max_links = max_links
        self.state = FieldState.NONE
        self.page_count = 0
        self.links_emitted = 0
        self._title: List[str] = []
        self._body: List[str] = []

    @property
    def pages_emitted(self) -> int:
        return self.page_count

    # ------------------------------------------------------------------
    # Event dispatch
    # ------------------------------------------------------------------
    def handle(self, event: Event) -> List[Record]:
        """Apply one event and return the records it produced (often none)."""
        if isinstance(event, FieldOpen):
            self._open(event.name)
            return []
        if isinstance(event, Characters):
            self._characters(event.chunk)
            return []
        if isinstance(event, FieldClose):
            return self._close(event.name)
        raise TypeError(f"Unknown event: {event!r}")

    def _open(self, name: str) -> None:
        if name == TITLE_FIELD:
            self.state = FieldState.IN_TITLE
        elif name == BODY_FIELD:
            self.state = FieldState.IN_BODY
        else:
            self.state = FieldState.NONE

    def _characters(self, chunk: str) -> None:
        if self.state is FieldState.IN_TITLE:
            self._title.append(chunk)
        elif self.state is FieldState.IN_BODY:
            self._body.append(chunk)

    def _close(self, name: str) -> List[Record]:
        if name == TITLE_FIELD:
            self.page_count += 1
            page = Page(id=self.page_count, title="".join(self._title).strip())
            self._title = []
            return [page]

        if name == BODY_FIELD:
            targets = extract_links("".join(self._body), max_links=self.max_links)
            self._body = []
            self.links_emitted += len(targets)
            return [Link(page_id=self.page_count, target=t) for t in targets]

        self.state = FieldState.NONE
        return []

"""The interface every record sink implements."""

from __future__ import annotations

from typing import Protocol

from wikilinks.dump.models import Link, Page

# Column width of ``title`` / ``link`` in every table we write.
MAX_TEXT_LENGTH = 100


class RecordSink(Protocol):
    """Receives records in emission order: each Page, then that page's Links."""

    def begin(self) -> None:
        """Called once before the first record (schema, headers, ...)."""

    def write_page(self, page: Page) -> None:
        ...

    def write_link(self, link: Link) -> None:
        ...

    def finish(self) -> None:
        """Called once after the last record of a successful run."""

    def abort(self) -> None:
        """Called instead of :meth:`finish` when the run fails."""

"""SQLite output: rows in the ``pages`` and ``links`` tables."""

from __future__ import annotations

import logging
import sqlite3

from wikilinks.db import pages as db_pages
from wikilinks.db.migrations import init_db
from wikilinks.dump.models import Link, Page
from wikilinks.sinks.base import MAX_TEXT_LENGTH

log = logging.getLogger(__name__)


def _fit(text: str) -> str:
    if len(text) > MAX_TEXT_LENGTH:
        log.debug("Truncating %d-char value %r", len(text), text[:40])
        return text[:MAX_TEXT_LENGTH]
    return text


class SqliteSink:
    """Replaces the dump tables' contents with the records of one run.

    Everything from ``begin()`` on runs in one transaction: ``finish()``
    commits it and ``abort()`` rolls it back, so a failed run leaves the
    previous contents untouched.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def begin(self) -> None:
        init_db(self.conn)
        db_pages.clear_dump(self.conn)

    def write_page(self, page: Page) -> None:
        db_pages.insert_page(self.conn, Page(id=page.id, title=_fit(page.title)))

    def write_link(self, link: Link) -> None:
        db_pages.insert_link(self.conn, Link(page_id=link.page_id, target=_fit(link.target)))

    def finish(self) -> None:
        self.conn.commit()

    def abort(self) -> None:
        self.conn.rollback()

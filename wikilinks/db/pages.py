"""Operations on the ``pages`` and ``links`` tables.

The insert helpers do **not** commit: a dump run writes every row inside a
single transaction that the caller commits or rolls back.
"""

from __future__ import annotations

import sqlite3
from typing import Optional

from wikilinks.dump.models import Link, Page


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def insert_page(conn: sqlite3.Connection, page: Page) -> None:
    conn.execute(
        "INSERT OR REPLACE INTO pages (id, title) VALUES (?, ?)",
        (page.id, page.title),
    )


def insert_link(conn: sqlite3.Connection, link: Link) -> None:
    conn.execute(
        "INSERT INTO links (page_id, target) VALUES (?, ?)",
        (link.page_id, link.target),
    )


def clear_dump(conn: sqlite3.Connection) -> None:
    """Delete every page and link row, ready for a fresh dump."""
    conn.execute("DELETE FROM links")
    conn.execute("DELETE FROM pages")


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def get_page(conn: sqlite3.Connection, page_id: int) -> Optional[Page]:
    """Fetch a single page by id.  Returns ``None`` if not found."""
    row = conn.execute(
        "SELECT id, title FROM pages WHERE id = ?", (page_id,)
    ).fetchone()
    return Page(id=row["id"], title=row["title"]) if row else None


def list_links(conn: sqlite3.Connection, page_id: int) -> list[Link]:
    """Return the links of *page_id* in the order they were written."""
    rows = conn.execute(
        "SELECT page_id, target FROM links WHERE page_id = ? ORDER BY id",
        (page_id,),
    ).fetchall()
    return [Link(page_id=r["page_id"], target=r["target"]) for r in rows]


def count_rows(conn: sqlite3.Connection) -> tuple[int, int]:
    """Return ``(pages, links)`` row counts."""
    pages = conn.execute("SELECT COUNT(*) FROM pages").fetchone()[0]
    links = conn.execute("SELECT COUNT(*) FROM links").fetchone()[0]
    return pages, links

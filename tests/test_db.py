"""Database layer tests.

All tests use an in-memory SQLite database so they are fast, isolated and
never touch ~/.wikilinks_data.
"""

from __future__ import annotations

import sqlite3
from typing import Generator

import pytest

from wikilinks.config import settings
from wikilinks.db.connection import get_connection
from wikilinks.db.migrations import current_version, init_db, migrate
from wikilinks.db.pages import (
    clear_dump,
    count_rows,
    get_page,
    insert_link,
    insert_page,
    list_links,
)
from wikilinks.dump.models import Link, Page


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def conn() -> Generator[sqlite3.Connection, None, None]:
    """In-memory connection with the schema initialised."""
    connection = get_connection(db_path=":memory:")  # type: ignore[arg-type]
    init_db(connection)
    yield connection
    connection.close()


# ---------------------------------------------------------------------------
# connection / init
# ---------------------------------------------------------------------------

class TestConnection:
    def test_row_factory(self, conn: sqlite3.Connection) -> None:
        row = conn.execute("SELECT 1 AS one").fetchone()
        assert row["one"] == 1

    def test_wal_mode(self, conn: sqlite3.Connection) -> None:
        row = conn.execute("PRAGMA journal_mode").fetchone()
        # In-memory DBs always return 'memory', on-disk returns 'wal'
        assert row[0] in ("wal", "memory")

    def test_default_path_creates_workspace(self, tmp_path, monkeypatch) -> None:
        workspace = tmp_path / "ws"
        monkeypatch.setattr("wikilinks.config.settings.workspace_dir", workspace)
        connection = get_connection()
        connection.close()
        assert workspace.is_dir()
        assert settings.db_path.parent == workspace


class TestInitDb:
    def test_tables_exist(self, conn: sqlite3.Connection) -> None:
        tables = {
            r[0]
            for r in conn.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            ).fetchall()
        }
        assert {"pages", "links", "schema_version"} <= tables

    def test_current_version_zero_on_fresh_db(self, conn: sqlite3.Connection) -> None:
        assert current_version(conn) == 0

    def test_init_db_is_idempotent(self, conn: sqlite3.Connection) -> None:
        # Calling init_db a second time must not raise
        init_db(conn)

    def test_migrate_applies_pending(self, conn: sqlite3.Connection, monkeypatch) -> None:
        monkeypatch.setattr(
            "wikilinks.db.migrations.MIGRATIONS",
            [(1, "ALTER TABLE pages ADD COLUMN namespace INTEGER")],
        )
        migrate(conn)
        migrate(conn)
        assert current_version(conn) == 1
        columns = [r["name"] for r in conn.execute("PRAGMA table_info(pages)").fetchall()]
        assert "namespace" in columns


# ---------------------------------------------------------------------------
# pages / links
# ---------------------------------------------------------------------------

class TestPagesAndLinks:
    def test_insert_and_get_page(self, conn: sqlite3.Connection) -> None:
        insert_page(conn, Page(7, "Haus"))
        conn.commit()
        assert get_page(conn, 7) == Page(7, "Haus")

    def test_get_missing_page(self, conn: sqlite3.Connection) -> None:
        assert get_page(conn, 404) is None

    def test_links_keep_insertion_order(self, conn: sqlite3.Connection) -> None:
        for target in ("Zebra", "Affe", "Mond"):
            insert_link(conn, Link(1, target))
        assert [link.target for link in list_links(conn, 1)] == ["Zebra", "Affe", "Mond"]

    def test_link_without_page_allowed(self, conn: sqlite3.Connection) -> None:
        insert_link(conn, Link(0, "Verwaist"))
        assert list_links(conn, 0) == [Link(0, "Verwaist")]

    def test_inserts_do_not_commit(self, conn: sqlite3.Connection) -> None:
        insert_page(conn, Page(1, "Offen"))
        assert conn.in_transaction
        conn.rollback()
        assert get_page(conn, 1) is None

    def test_clear_dump(self, conn: sqlite3.Connection) -> None:
        insert_page(conn, Page(1, "A"))
        insert_link(conn, Link(1, "B"))
        clear_dump(conn)
        assert count_rows(conn) == (0, 0)

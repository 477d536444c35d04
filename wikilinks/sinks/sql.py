"""MySQL dump output: DDL followed by one INSERT per record.

The result is meant to be piped straight into ``mysql``::

    wikilinks dump dewiki-pages-articles.xml.bz2 > result.sql
    mysql thesaurus < result.sql
"""

from __future__ import annotations

from typing import TextIO

from wikilinks.dump.models import Link, Page

_HEADER = (
    "SET NAMES utf8;",
    "DROP TABLE IF EXISTS wikipedia_pages;",
    "CREATE TABLE `wikipedia_pages` ( "
    "`page_id` INT NOT NULL AUTO_INCREMENT PRIMARY KEY , "
    "`title` VARCHAR( 100 ) NOT NULL "
    ") ENGINE = MYISAM;",
    "DROP TABLE IF EXISTS wikipedia_links;",
    "CREATE TABLE `wikipedia_links` ( "
    " `link_id` INT NOT NULL AUTO_INCREMENT PRIMARY KEY , "
    " `page_id` INT NOT NULL , "
    " `link` VARCHAR( 100 ) NOT NULL "
    ") ENGINE = MYISAM;",
)

_FOOTER = (
    "ALTER TABLE `wikipedia_pages` ADD INDEX ( `page_id` );",
    "ALTER TABLE `wikipedia_pages` ADD INDEX ( `title` );",
    "ALTER TABLE `wikipedia_links` ADD INDEX ( `page_id` );",
)


def escape(text: str) -> str:
    """Quote *text* for a single-quoted MySQL string literal.

    Single quotes are doubled and backslashes are dropped altogether.
    """
    return text.replace("'", "''").replace("\\", "")


class SqlDumpSink:
    """Writes MySQL statements to a text stream.

    Over-length text is left to the ``VARCHAR(100)`` columns to deal with.
    """

    def __init__(self, out: TextIO) -> None:
        self.out = out

    def _emit(self, line: str) -> None:
        self.out.write(line + "\n")

    def begin(self) -> None:
        for line in _HEADER:
            self._emit(line)

    def write_page(self, page: Page) -> None:
        self._emit(f"INSERT INTO wikipedia_pages VALUES ({page.id}, '{escape(page.title)}');")

    def write_link(self, link: Link) -> None:
        self._emit(
            f"INSERT INTO wikipedia_links (page_id, link) VALUES "
            f"({link.page_id}, '{escape(link.target)}');"
        )

    def finish(self) -> None:
        for line in _FOOTER:
            self._emit(line)
        self.out.flush()

    def abort(self) -> None:
        self.out.flush()

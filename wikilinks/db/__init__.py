"""Database layer package.

Public re-exports so callers can write::

    from wikilinks.db import get_connection, init_db
"""

from wikilinks.db.connection import get_connection
from wikilinks.db.migrations import init_db

__all__ = ["get_connection", "init_db"]

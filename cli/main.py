"""wikilinks CLI — entry-point for dump conversion and the SQLite store.

Usage:
    python cli/main.py --help

Commands:
    dump      → convert an XML export into page/link records
    db init   → create the SQLite tables
    db stats  → show page and link counts
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from wikilinks.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import enum
import logging
from contextlib import ExitStack
from typing import Optional

import typer

from wikilinks.config import settings
from wikilinks.db import get_connection, init_db
from wikilinks.db.pages import count_rows
from wikilinks.dump import DumpFormatError, run_dump
from wikilinks.sinks import JsonLinesSink, SqlDumpSink, SqliteSink

app = typer.Typer(
    name="wikilinks",
    help="Extract pages and internal links from a wiki XML export.",
    no_args_is_help=True,
)


class OutputFormat(str, enum.Enum):
    sql = "sql"
    jsonl = "jsonl"
    sqlite = "sqlite"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


# ---------------------------------------------------------------------------
# Dump command
# ---------------------------------------------------------------------------
@app.command("dump")
def dump(
    path: Path = typer.Argument(..., help="Wiki XML export (.xml or .xml.bz2)."),
    format: OutputFormat = typer.Option(
        OutputFormat.sql, "--format", "-f", help="Output format: sql | jsonl | sqlite."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write sql/jsonl output here instead of stdout."
    ),
    db: Optional[Path] = typer.Option(
        None, "--db", help="SQLite file for --format sqlite (default: workspace DB)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Convert the export at PATH into page and link records."""
    _configure_logging(verbose)

    if format is OutputFormat.sqlite and output is not None:
        raise typer.BadParameter("--output does not apply to --format sqlite; use --db.", param_hint="--output")
    if format is not OutputFormat.sqlite and db is not None:
        raise typer.BadParameter(f"--db only applies to --format sqlite, not {format.value}.", param_hint="--db")

    if not path.is_file():
        typer.echo(f"[dump] No such file: {path}", err=True)
        raise typer.Exit(1)

    with ExitStack() as stack:
        if format is OutputFormat.sqlite:
            conn = get_connection(db)
            stack.callback(conn.close)
            sink = SqliteSink(conn)
            target = str(db or settings.db_path)
        else:
            if output is not None:
                out = stack.enter_context(open(output, "w", encoding="utf-8"))
                target = str(output)
            else:
                out = sys.stdout
                target = "stdout"
            sink = JsonLinesSink(out) if format is OutputFormat.jsonl else SqlDumpSink(out)

        try:
            stats = run_dump(path, sink)
        except DumpFormatError as e:
            typer.echo(f"[dump] Malformed input, aborting: {e}", err=True)
            raise typer.Exit(1)

    typer.echo(f"[dump] {stats.pages} pages, {stats.links} links → {target}", err=True)


# ---------------------------------------------------------------------------
# DB commands
# ---------------------------------------------------------------------------
db_app = typer.Typer(help="SQLite store operations.", no_args_is_help=True)
app.add_typer(db_app, name="db")


@db_app.command("init")
def db_init(
    db: Optional[Path] = typer.Option(None, "--db", help="SQLite file (default: workspace DB)."),
) -> None:
    """Initialise the SQLite database (create tables if they do not exist)."""
    conn = get_connection(db)
    init_db(conn)
    conn.close()
    typer.echo(f"[db init] Database ready at {db or settings.db_path}")


@db_app.command("stats")
def db_stats(
    db: Optional[Path] = typer.Option(None, "--db", help="SQLite file (default: workspace DB)."),
) -> None:
    """Show how many pages and links the database holds."""
    conn = get_connection(db)
    init_db(conn)
    pages, links = count_rows(conn)
    conn.close()
    typer.echo(f"[db stats] pages: {pages}")
    typer.echo(f"[db stats] links: {links}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()

"""Dump pipeline: decoder → accumulator → sink.

``run_dump`` orchestrates a full run:

    read chunk → decode events → accumulate page fields → extract links → sink

The whole run is one sequential pass.  Page ids are only meaningful if every
event of the document passes through the same accumulator in order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Iterable, Optional

from wikilinks.config import settings
from wikilinks.dump.accumulator import PageAccumulator
from wikilinks.dump.decoder import iter_events, open_dump
from wikilinks.dump.models import Event, Link, Page

if TYPE_CHECKING:
    from wikilinks.sinks.base import RecordSink

log = logging.getLogger(__name__)


@dataclass
class DumpStats:
    pages: int = 0
    links: int = 0


def drive(
    events: Iterable[Event],
    sink: RecordSink,
    accumulator: Optional[PageAccumulator] = None,
) -> DumpStats:
    """Feed *events* through an accumulator and hand every record to *sink*.

    The sink's ``begin()`` is called before the first event and ``finish()``
    only after the last one.  If anything raises mid-run, the sink gets
    ``abort()`` instead of ``finish()`` and the exception propagates.
    """
    acc = accumulator or PageAccumulator(max_links=settings.max_links_per_page)
    progress_every = settings.progress_every

    sink.begin()
    try:
        for event in events:
            for record in acc.handle(event):
                if isinstance(record, Page):
                    sink.write_page(record)
                    if progress_every and record.id % progress_every == 0:
                        log.info("Processed %d pages (%d links)", record.id, acc.links_emitted)
                elif isinstance(record, Link):
                    sink.write_link(record)
    except Exception:
        log.error("Run aborted after %d pages", acc.pages_emitted)
        sink.abort()
        raise
    sink.finish()

    return DumpStats(pages=acc.pages_emitted, links=acc.links_emitted)


def dump_stream(stream: BinaryIO, sink: RecordSink) -> DumpStats:
    """Run the pipeline over an already-open binary *stream*."""
    return drive(iter_events(stream), sink)


def run_dump(path: str | Path, sink: RecordSink) -> DumpStats:
    """Decode the dump at *path* and write its pages and links to *sink*.

    Args:
        path: ``.xml`` or ``.xml.bz2`` export file.
        sink: Destination for the emitted records.

    Returns:
        Page and link counts for the run.

    Raises:
        FileNotFoundError: If *path* does not exist.
        DumpFormatError: If the document is not well-formed.  Records emitted
            before the failure point must not be trusted.
    """
    log.info("Dumping pages and links from %s", path)
    with open_dump(path) as stream:
        stats = dump_stream(stream, sink)
    log.info("Done: %d pages, %d links", stats.pages, stats.links)
    return stats

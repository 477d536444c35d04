"""Dump package — streaming decode, page accumulation & link extraction."""

from wikilinks.dump.accumulator import FieldState, PageAccumulator
from wikilinks.dump.decoder import DumpFormatError, iter_events, open_dump
from wikilinks.dump.links import extract_links
from wikilinks.dump.models import Characters, FieldClose, FieldOpen, Link, Page
from wikilinks.dump.pipeline import DumpStats, drive, run_dump

__all__ = [
    "Characters",
    "DumpFormatError",
    "DumpStats",
    "FieldClose",
    "FieldOpen",
    "FieldState",
    "Link",
    "Page",
    "PageAccumulator",
    "drive",
    "extract_links",
    "iter_events",
    "open_dump",
    "run_dump",
]

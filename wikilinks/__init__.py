"""wikilinks — turn a wiki XML export into page and link tables."""

__version__ = "0.1.0"

"""Data models for the dump pipeline.

Two families of plain dataclasses live here:

* the structural events produced by the stream decoder
  (:class:`FieldOpen`, :class:`Characters`, :class:`FieldClose`), and
* the records emitted by the page accumulator (:class:`Page`, :class:`Link`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


# ---------------------------------------------------------------------------
# Structural events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldOpen:
    """An element start tag, e.g. ``<title>``."""

    name: str


@dataclass(frozen=True)
class Characters:
    """A run of character data.  One field may arrive in many chunks."""

    chunk: str


@dataclass(frozen=True)
class FieldClose:
    """An element end tag, e.g. ``</title>``."""

    name: str


Event = Union[FieldOpen, Characters, FieldClose]


# ---------------------------------------------------------------------------
# Emitted records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Page:
    id: int
    title: str


@dataclass(frozen=True)
class Link:
    page_id: int
    target: str


Record = Union[Page, Link]

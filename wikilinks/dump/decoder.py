"""Streaming decoder: XML export bytes → structural events.

The dump is fed to an incremental SAX parser in fixed-size chunks.  Parser
callbacks only queue events; :func:`iter_events` drains the queue after every
chunk, so memory stays bounded by one chunk plus whatever the consumer keeps.

Any parser complaint, warnings included, is fatal and surfaces as
:class:`DumpFormatError`.
"""

from __future__ import annotations

import bz2
import logging
import xml.sax
from collections import deque
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Deque, Iterator, Optional
from xml.sax.handler import ContentHandler, ErrorHandler

from wikilinks.config import settings
from wikilinks.dump.models import Characters, Event, FieldClose, FieldOpen

log = logging.getLogger(__name__)


class DumpFormatError(Exception):
    """The input could not be decoded as a well-formed document."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)

    @classmethod
    def from_sax(cls, exc: xml.sax.SAXParseException) -> DumpFormatError:
        return cls(exc.getMessage(), exc.getLineNumber(), exc.getColumnNumber())


# ---------------------------------------------------------------------------
# SAX plumbing
# ---------------------------------------------------------------------------

class _EventCollector(ContentHandler):
    """Translates SAX callbacks into queued :mod:`~wikilinks.dump.models` events."""

    def __init__(self, queue: Deque[Event]) -> None:
        super().__init__()
        self._queue = queue

    def startElement(self, name, attrs):  # noqa: N802
        self._queue.append(FieldOpen(name))

    def endElement(self, name):  # noqa: N802
        self._queue.append(FieldClose(name))

    def characters(self, content):
        self._queue.append(Characters(content))


class _StrictErrors(ErrorHandler):
    """Raise on everything, including warnings."""

    def warning(self, exception):
        raise exception

    def error(self, exception):
        raise exception

    def fatalError(self, exception):  # noqa: N802
        raise exception


def _make_parser(queue: Deque[Event]):
    parser = xml.sax.make_parser()
    parser.setFeature(xml.sax.handler.feature_namespaces, False)
    # Never reach out for DTDs or external entities.
    parser.setFeature(xml.sax.handler.feature_external_ges, False)
    parser.setContentHandler(_EventCollector(queue))
    parser.setErrorHandler(_StrictErrors())
    return parser


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

@contextmanager
def open_dump(path: str | Path) -> Iterator[BinaryIO]:
    """Open a dump file for binary reading, decompressing ``.bz2`` on the fly."""
    path = Path(path)
    if path.suffix == ".bz2":
        log.debug("Opening %s as bzip2 stream", path)
        f = bz2.open(path, "rb")
    else:
        log.debug("Opening %s as plain XML", path)
        f = open(path, "rb")
    try:
        yield f  # type: ignore[misc]
    finally:
        f.close()


def _read(stream: BinaryIO, size: int) -> bytes:
    """Read one chunk, reporting a broken compressed stream as malformed input."""
    try:
        return stream.read(size)
    except (EOFError, OSError) as exc:
        # Truncated .bz2 (EOFError) or bytes that are not bzip2 at all (OSError)
        raise DumpFormatError(f"Unreadable input stream: {exc}") from exc


def iter_events(stream: BinaryIO, chunk_size: Optional[int] = None) -> Iterator[Event]:
    """Yield structural events from *stream* in document order.

    Args:
        stream: Binary file-like object positioned at the start of the document.
        chunk_size: Bytes read per step.  Defaults to ``settings.read_chunk_size``.

    Raises:
        DumpFormatError: On any well-formedness violation, including a
            document that ends before all of its elements are closed, and
            on a compressed stream that is cut off or corrupt.  Events
            preceding the violation have already been yielded.
    """
    size = chunk_size or settings.read_chunk_size
    queue: Deque[Event] = deque()
    parser = _make_parser(queue)
    empty = True

    try:
        while True:
            chunk = _read(stream, size)
            if not chunk:
                break
            empty = False
            parser.feed(chunk)
            while queue:
                yield queue.popleft()
        if empty:
            # The expat reader silently accepts a close() with nothing fed.
            raise DumpFormatError("no element found", 1, 0)
        parser.close()
    except xml.sax.SAXParseException as exc:
        # Drain what the parser accepted before the error.
        while queue:
            yield queue.popleft()
        raise DumpFormatError.from_sax(exc) from exc
    while queue:
        yield queue.popleft()

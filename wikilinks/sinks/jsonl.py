"""Newline-delimited JSON output, one object per record."""

from __future__ import annotations

import json
from typing import TextIO

from wikilinks.dump.models import Link, Page


class JsonLinesSink:
    def __init__(self, out: TextIO) -> None:
        self.out = out

    def _emit(self, obj: dict) -> None:
        self.out.write(json.dumps(obj, ensure_ascii=False) + "\n")

    def begin(self) -> None:
        pass

    def write_page(self, page: Page) -> None:
        self._emit({"type": "page", "id": page.id, "title": page.title})

    def write_link(self, link: Link) -> None:
        self._emit({"type": "link", "page_id": link.page_id, "target": link.target})

    def finish(self) -> None:
        self.out.flush()

    def abort(self) -> None:
        self.out.flush()

"""Tests for the page accumulator state machine, driven by scripted events."""

from __future__ import annotations

import pytest

from wikilinks.dump.accumulator import FieldState, PageAccumulator
from wikilinks.dump.models import Characters, FieldClose, FieldOpen, Link, Page


def _field(name: str, *chunks: str) -> list:
    return [FieldOpen(name), *(Characters(c) for c in chunks), FieldClose(name)]


def _page(title: str, body: str) -> list:
    return [
        FieldOpen("page"),
        *_field("title", title),
        *_field("ns", "0"),
        FieldOpen("revision"),
        *_field("text", body),
        FieldClose("revision"),
        FieldClose("page"),
    ]


def _run(events: list, acc: PageAccumulator | None = None) -> list:
    acc = acc or PageAccumulator()
    records = []
    for event in events:
        records.extend(acc.handle(event))
    return records


# ---------------------------------------------------------------------------
# State transitions
# ---------------------------------------------------------------------------

class TestTransitions:
    def test_initial_state_is_none(self) -> None:
        assert PageAccumulator().state is FieldState.NONE

    def test_title_open(self) -> None:
        acc = PageAccumulator()
        acc.handle(FieldOpen("title"))
        assert acc.state is FieldState.IN_TITLE

    def test_text_open(self) -> None:
        acc = PageAccumulator()
        acc.handle(FieldOpen("text"))
        assert acc.state is FieldState.IN_BODY

    def test_other_open_resets(self) -> None:
        acc = PageAccumulator()
        acc.handle(FieldOpen("text"))
        acc.handle(FieldOpen("comment"))
        assert acc.state is FieldState.NONE

    def test_other_close_resets(self) -> None:
        acc = PageAccumulator()
        acc.handle(FieldOpen("title"))
        acc.handle(FieldClose("ns"))
        assert acc.state is FieldState.NONE

    def test_characters_outside_fields_discarded(self) -> None:
        records = _run([Characters("Lost"), *_field("title", "Kept")])
        assert records == [Page(id=1, title="Kept")]


# ---------------------------------------------------------------------------
# Emission
# ---------------------------------------------------------------------------

class TestEmission:
    def test_title_close_emits_page(self) -> None:
        assert _run(_field("title", "Haus")) == [Page(id=1, title="Haus")]

    def test_title_is_trimmed(self) -> None:
        assert _run(_field("title", "  \n Haus \t")) == [Page(id=1, title="Haus")]

    def test_chunks_are_joined(self) -> None:
        records = _run([*_field("title", "Flug", "zeug"), *_field("text", "[[Trag", "fläche]]")])
        assert records == [Page(id=1, title="Flugzeug"), Link(page_id=1, target="Tragfläche")]

    def test_text_close_emits_links_for_current_page(self) -> None:
        records = _run(_page("Haus", "[[Dach]] und [[Keller|Kellers]] seit [[1900]]"))
        assert records == [
            Page(id=1, title="Haus"),
            Link(page_id=1, target="Dach"),
            Link(page_id=1, target="Keller"),
        ]

    def test_page_without_links(self) -> None:
        assert _run(_page("Leer", "kein Link")) == [Page(id=1, title="Leer")]

    def test_links_capped_per_page(self) -> None:
        body = "".join(f"[[L{i}]]" for i in range(20))
        records = _run(_page("Viel", body))
        links = [r for r in records if isinstance(r, Link)]
        assert [link.target for link in links] == [f"L{i}" for i in range(15)]

    def test_max_links_override(self) -> None:
        records = _run(_page("Wenig", "[[A]][[B]][[C]]"), PageAccumulator(max_links=1))
        assert records == [Page(id=1, title="Wenig"), Link(page_id=1, target="A")]

    def test_text_before_any_title_uses_page_zero(self) -> None:
        assert _run(_field("text", "[[Foo]]")) == [Link(page_id=0, target="Foo")]


# ---------------------------------------------------------------------------
# Multi-page runs
# ---------------------------------------------------------------------------

class TestRun:
    def test_ids_are_sequential(self) -> None:
        events = []
        for i in range(5):
            events.extend(_page(f"Seite {i}", f"[[Ziel {i}]]"))
        records = _run(events)
        pages = [r for r in records if isinstance(r, Page)]
        assert [p.id for p in pages] == [1, 2, 3, 4, 5]

    def test_links_follow_their_page(self) -> None:
        records = _run(_page("A", "[[X]]") + _page("B", "[[Y]][[Z]]"))
        assert records == [
            Page(id=1, title="A"),
            Link(page_id=1, target="X"),
            Page(id=2, title="B"),
            Link(page_id=2, target="Y"),
            Link(page_id=2, target="Z"),
        ]

    def test_buffers_do_not_leak_between_pages(self) -> None:
        records = _run(_page("A", "[[X]]") + _page("B", "nichts"))
        assert records == [Page(id=1, title="A"), Link(page_id=1, target="X"), Page(id=2, title="B")]

    def test_counters(self) -> None:
        acc = PageAccumulator()
        _run(_page("A", "[[X]][[Y]]") + _page("B", "[[Z]]"), acc)
        assert acc.pages_emitted == 2
        assert acc.links_emitted == 3

    def test_unknown_event_rejected(self) -> None:
        with pytest.raises(TypeError):
            PageAccumulator().handle("not an event")  # type: ignore[arg-type]

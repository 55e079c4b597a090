from __future__ import annotations

from moded.buffer import Document
from moded.search import SearchState, search_for


def test_search_returns_row_major_matches() -> None:
    document = Document.from_text("xab\nab y")

    state = search_for(document, "ab")

    assert state.matches == [(0, 1), (1, 0)]
    assert state.total == 2
    assert state.counters == (0, 2)


def test_search_reports_grapheme_columns() -> None:
    document = Document.from_text("é 🇫🇷 ab")

    state = search_for(document, "ab")

    assert state.matches == [(0, 4)]
    assert document.rows[0].matches == ((4, 6),)


def test_matches_never_span_rows() -> None:
    document = Document.from_text("a\nb")

    assert search_for(document, r"a\nb").total == 0
    assert search_for(document, r"a\s*b").total == 0


def test_empty_matches_are_skipped() -> None:
    document = Document.from_text("abc")

    assert search_for(document, "x*").total == 0


def test_invalid_pattern_yields_no_matches() -> None:
    document = Document.from_text("abc")

    state = search_for(document, "(")

    assert state.total == 0
    assert state.pattern == "("


def test_new_search_clears_previous_row_matches() -> None:
    document = Document.from_text("abc\nxyz")
    search_for(document, "b")
    assert document.rows[0].matches

    search_for(document, "y")

    assert document.rows[0].matches == ()
    assert document.rows[1].matches == ((1, 2),)


def test_advance_walks_matches_then_exhausts() -> None:
    state = SearchState(pattern="a", matches=[(0, 0), (2, 1)])

    assert state.advance() == (0, 0)
    assert state.counters == (1, 2)
    assert state.advance() == (2, 1)
    assert state.current_match == (2, 1)
    assert state.advance() is None
    assert state.current_match is None


def test_reset_forgets_matches() -> None:
    state = SearchState(pattern="a", matches=[(0, 0)])
    state.advance()

    state.reset()

    assert state.counters == (0, 0)
    assert state.pattern == ""

from __future__ import annotations

from moded.buffer import Document
from moded.search import search_for
from moded.view import StatusLine, Viewport, build_mirror


def make_status() -> StatusLine:
    return StatusLine(command="", mode_label="NORMAL", current=1, total=1)


def test_status_layout_right_aligns_label_and_counter() -> None:
    status = StatusLine(command=":3d", mode_label="COMMAND", current=2, total=14)

    left, counter = status.layout(30)

    assert counter == " 2/14 "
    assert left.startswith(":3d")
    assert left.endswith(" COMMAND ")
    assert len(left) + len(counter) == 30


def test_status_layout_truncates_long_command_from_the_left() -> None:
    status = StatusLine(command=":" + "w" * 40, mode_label="COMMAND", current=1, total=1)

    rendered = status.render(20)

    assert len(rendered) == 20
    assert rendered.startswith("w")


def test_mirror_pads_gutter_and_fills_past_end() -> None:
    document = Document.from_text("\n".join(f"r{n}" for n in range(10)))
    viewport = Viewport(document, height=13)

    mirror = build_mirror(viewport, make_status(), highlight_enabled=False)

    assert [row.gutter for row in mirror.rows[:2]] == [" 1", " 2"]
    assert mirror.rows[-1].gutter == "10"
    assert mirror.filler == 2
    assert mirror.text.splitlines()[0] == " 1 r0"
    assert mirror.text.splitlines()[-1] == "~"


def test_mirror_follows_scrolled_frame() -> None:
    document = Document.from_text("\n".join(f"r{n}" for n in range(20)))
    viewport = Viewport(document, height=5)
    viewport.goto_line(10)

    mirror = build_mirror(viewport, make_status(), highlight_enabled=False)

    assert [row.number for row in mirror.rows] == [8, 9, 10, 11]
    assert mirror.cursor_row is not None and mirror.cursor_row.text == "r10"


def test_mirror_carries_search_matches_and_cursor_offsets() -> None:
    document = Document.from_text("é ab")
    search_for(document, "ab")
    viewport = Viewport(document)
    viewport.column = 2

    mirror = build_mirror(viewport, make_status(), highlight_enabled=False)

    row = mirror.rows[0]
    assert row.matches == ((2, 4),)
    assert row.char_offset(mirror.cursor_column) == len("é ")


def test_mirror_highlights_by_file_extension() -> None:
    document = Document.from_text("def f():\n    pass", file_name="demo.py")
    viewport = Viewport(document)

    mirror = build_mirror(viewport, make_status())

    assert any(colour == "purple" for _, colour, _ in mirror.rows[0].spans)

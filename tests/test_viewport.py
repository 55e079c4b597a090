from __future__ import annotations

from moded.buffer import Document
from moded.view import CursorPosition, Viewport, is_separator


def make_viewport(*lines: str, height: int = 6) -> Viewport:
    return Viewport(Document.from_text("\n".join(lines)), height=height)


def numbered(count: int) -> list[str]:
    return [f"line {index}" for index in range(count)]


def test_cursor_screen_column_includes_gutter() -> None:
    viewport = make_viewport(*numbered(12))
    viewport.column = 3

    assert viewport.gutter_width == 2
    assert viewport.cursor == CursorPosition(0, 6)


def test_down_moves_cursor_then_scrolls_at_bottom_edge() -> None:
    viewport = make_viewport(*numbered(20), height=6)

    for _ in range(4):
        assert viewport.down() is True
    assert (viewport.screen_row, viewport.frame.first_visible_row) == (4, 0)

    assert viewport.down() is True
    assert (viewport.screen_row, viewport.frame.first_visible_row) == (4, 1)
    assert viewport.absolute_row == 5


def test_down_refuses_to_pass_last_row() -> None:
    viewport = make_viewport("a", "b")

    assert viewport.down() is True
    assert viewport.down() is False
    assert viewport.absolute_row == 1


def test_up_scrolls_at_top_edge_and_stops_at_row_zero() -> None:
    viewport = make_viewport(*numbered(20), height=6)
    viewport.goto_line(10)
    top = viewport.frame.first_visible_row

    while viewport.screen_row > 0:
        viewport.up()
    assert viewport.frame.first_visible_row == top

    assert viewport.up() is True
    assert viewport.frame.first_visible_row == top - 1

    viewport.goto_line(0)
    assert viewport.up() is False
    assert (viewport.screen_row, viewport.frame.first_visible_row) == (0, 0)


def test_screen_row_stays_above_status_line() -> None:
    viewport = make_viewport(*numbered(50), height=5)

    for _ in range(49):
        viewport.down()
        assert 0 <= viewport.screen_row <= viewport.frame.height - 2


def test_vertical_motion_clamps_to_shorter_rows() -> None:
    viewport = make_viewport("long line", "ab", "another long one")
    viewport.column = 7

    viewport.down()
    assert viewport.column == 2

    viewport.down()
    assert viewport.column == 2


def test_sticky_column_down_then_up_is_idempotent() -> None:
    viewport = make_viewport("abcdef", "abcdefgh")
    viewport.column = 5

    viewport.down()
    viewport.up()

    assert viewport.column == 5


def test_right_wraps_to_next_row_start() -> None:
    viewport = make_viewport("ab", "cd")
    viewport.column = 2

    assert viewport.right() is True
    assert (viewport.absolute_row, viewport.column) == (1, 0)


def test_right_at_end_of_document_is_noop() -> None:
    viewport = make_viewport("ab")
    viewport.column = 2

    assert viewport.right() is False
    assert viewport.column == 2


def test_left_wraps_to_previous_row_end() -> None:
    viewport = make_viewport("abc", "d")
    viewport.down()

    assert viewport.left() is True
    assert (viewport.absolute_row, viewport.column) == (0, 3)


def test_left_wraps_onto_empty_row_at_first_column() -> None:
    viewport = make_viewport("", "d")
    viewport.down()

    viewport.left()

    assert (viewport.absolute_row, viewport.column) == (0, 0)


def test_goto_line_matches_single_steps() -> None:
    lines = ["x" * (index % 7) for index in range(40)]
    jumped = make_viewport(*lines, height=8)
    stepped = make_viewport(*lines, height=8)
    for viewport in (jumped, stepped):
        viewport.goto_line(3)
        viewport.column = 3

    jumped.goto_line(33)
    while stepped.absolute_row < 33:
        stepped.down()

    assert jumped.screen_row == stepped.screen_row
    assert jumped.frame.first_visible_row == stepped.frame.first_visible_row
    assert jumped.column == stepped.column

    jumped.goto_line(2)
    while stepped.absolute_row > 2:
        stepped.up()

    assert jumped.screen_row == stepped.screen_row
    assert jumped.frame.first_visible_row == stepped.frame.first_visible_row
    assert jumped.column == stepped.column


def test_goto_line_clamps_target() -> None:
    viewport = make_viewport(*numbered(5))

    viewport.goto_line(99)
    assert viewport.absolute_row == 4

    viewport.goto_line(-3)
    assert viewport.absolute_row == 0


def test_next_word_skips_token_then_separators() -> None:
    viewport = make_viewport("foo, bar baz")

    assert viewport.next_word() is True
    assert viewport.column == 5

    viewport.next_word()
    assert viewport.column == 9


def test_next_word_falls_through_to_next_row() -> None:
    viewport = make_viewport("foo", "bar")

    viewport.next_word()

    assert (viewport.absolute_row, viewport.column) == (1, 0)


def test_prev_word_lands_on_token_start() -> None:
    viewport = make_viewport("foo bar")
    viewport.column = 6

    viewport.prev_word()
    assert viewport.column == 4

    viewport.prev_word()
    assert viewport.column == 0


def test_resize_keeps_cursor_on_screen() -> None:
    viewport = make_viewport(*numbered(30), height=20)
    viewport.goto_line(15)

    viewport.resize(6, 80)

    assert viewport.screen_row == viewport.frame.bottom
    assert viewport.absolute_row == 15


def test_is_separator() -> None:
    assert is_separator(" ")
    assert is_separator(",")
    assert not is_separator("a")
    assert not is_separator("é")


def test_fit_to_document_pulls_frame_back_after_shrink() -> None:
    viewport = make_viewport(*numbered(20))
    viewport.goto_line(19)
    assert viewport.frame.first_visible_row == 15

    del viewport.document.rows[10:]
    viewport.fit_to_document()

    assert viewport.frame.first_visible_row == 5
    assert viewport.absolute_row == 9
    assert viewport.screen_row == viewport.frame.bottom
    assert list(viewport.visible_rows()) == list(range(5, 10))


def test_fit_to_document_keeps_absolute_row_when_it_still_exists() -> None:
    viewport = make_viewport(*numbered(20))
    viewport.goto_line(19)
    viewport.goto_line(14)

    del viewport.document.rows[16:]
    viewport.fit_to_document()

    assert viewport.absolute_row == 14
    assert viewport.frame.first_visible_row == 11

from __future__ import annotations

from pathlib import Path

import pytest

from moded.buffer import Document, OpenError, Row, RowOffset, grapheme_count


def make_document(*lines: str, file_name: str = "") -> Document:
    return Document(rows=[Row(line) for line in lines], file_name=file_name)


def assert_lengths_consistent(document: Document) -> None:
    for row in document:
        assert row.length == grapheme_count(row.content)


def test_row_counts_graphemes_not_code_points() -> None:
    row = Row("éa🇫🇷")

    assert row.length == 3
    assert row.graphemes() == ["é", "a", "🇫🇷"]
    assert row.slice(1) == "a🇫🇷"


def test_empty_document_has_one_row() -> None:
    assert Document().lines() == ("",)
    assert Document(rows=[]).lines() == ("",)
    assert Document.from_text("").lines() == ("",)


def test_row_offset_classification() -> None:
    row = Row("abc")

    assert RowOffset.classify(row, 0) == RowOffset("start", 0)
    assert RowOffset.classify(row, 1) == RowOffset("at", 1)
    assert RowOffset.classify(row, 3) == RowOffset("end", 3)
    assert RowOffset.classify(row, 4) is None
    assert RowOffset.classify(row, -1) is None
    assert RowOffset.classify(Row(), 0) == RowOffset("end", 0)


@pytest.mark.parametrize(
    ("column", "expected"),
    [(0, "Xabc"), (1, "aXbc"), (3, "abcX")],
)
def test_insert_at_each_offset(column: int, expected: str) -> None:
    document = make_document("abc")

    assert document.insert(0, column, "X") is True

    assert document.lines() == (expected,)
    assert_lengths_consistent(document)


def test_insert_out_of_range_is_noop() -> None:
    document = make_document("abc")

    assert document.insert(0, 4, "X") is False
    assert document.insert(1, 0, "X") is False
    assert document.lines() == ("abc",)


def test_insert_inside_combining_sequence_keeps_graphemes_whole() -> None:
    document = make_document("e\u0301e")

    document.insert(0, 1, "x")

    assert document.lines() == ("e\u0301xe",)
    assert document.rows[0].length == 3


def test_delete_before_inside_row() -> None:
    document = make_document("abc")

    assert document.delete_before(0, 1) == 0
    assert document.lines() == ("bc",)

    assert document.delete_before(0, 2) == 1
    assert document.lines() == ("b",)


def test_delete_before_at_document_start_is_noop() -> None:
    document = make_document("abc")

    assert document.delete_before(0, 0) is None
    assert document.lines() == ("abc",)


def test_delete_before_merges_into_previous_row() -> None:
    document = make_document("ab", "cd")

    seam = document.delete_before(1, 0)

    assert seam == 2
    assert document.lines() == ("abcd",)
    assert_lengths_consistent(document)


def test_delete_before_on_empty_row_removes_it() -> None:
    document = make_document("ab", "")

    assert document.delete_before(1, 0) == 2
    assert document.lines() == ("ab",)


def test_split_line_in_the_middle() -> None:
    document = make_document("abcd")

    assert document.split_line(0, 2) == 0
    assert document.lines() == ("ab", "cd")


def test_split_line_at_start_inserts_row_above() -> None:
    document = make_document("abc")

    assert document.split_line(0, 0) == 0
    assert document.lines() == ("", "abc")


def test_split_line_at_end_inserts_row_below() -> None:
    document = make_document("abc")

    assert document.split_line(0, 3) == 0
    assert document.lines() == ("abc", "")


def test_split_after_open_brace_opens_indented_block() -> None:
    document = make_document("foo {")

    column = document.split_line(0, 5)

    assert document.lines() == ("foo {", "  ", "}")
    assert column == 2


def test_split_after_indented_open_brace_keeps_indent() -> None:
    document = make_document("  if x {")

    column = document.split_line(0, 8)

    assert document.lines() == ("  if x {", "    ", "  }")
    assert column == 4


def test_split_before_brace_is_plain_split() -> None:
    document = make_document("foo {")

    document.split_line(0, 4)

    assert document.lines() == ("foo ", "{")


def test_clear_and_replace_rows() -> None:
    document = make_document("a", "b")

    assert document.clear_row(1) is True
    assert document.clear_row(2) is False
    assert document.replace(0, Row("z")) is True
    assert document.replace(5, Row("z")) is False

    assert document.lines() == ("z", "")


def test_replace_range_never_leaves_zero_rows() -> None:
    document = make_document("a", "b")

    document.replace_range(0, 2, [])

    assert document.lines() == ("",)


def test_open_missing_file_yields_named_empty_document(tmp_path: Path) -> None:
    path = tmp_path / "new.txt"

    document = Document.open(str(path))

    assert document.file_name == str(path)
    assert document.lines() == ("",)


def test_open_without_path_is_unnamed() -> None:
    document = Document.open(None)

    assert document.file_name == ""
    assert len(document) == 1


def test_save_writes_rows_with_trailing_newline(tmp_path: Path) -> None:
    path = tmp_path / "out.txt"
    path.write_text("old contents that are longer\n", encoding="utf-8")
    document = make_document("one", "twö", file_name=str(path))

    written = document.save()

    assert path.read_text(encoding="utf-8") == "one\ntwö\n"
    assert written == len("one\ntwö\n".encode("utf-8"))


def test_open_reads_lines(tmp_path: Path) -> None:
    path = tmp_path / "in.txt"
    path.write_text("first\nsecond\n", encoding="utf-8")

    document = Document.open(str(path))

    assert document.lines() == ("first", "second")


def test_open_non_utf8_file_raises_open_error(tmp_path: Path) -> None:
    path = tmp_path / "binary.txt"
    path.write_bytes(b"\xff\xfeabc\n")

    with pytest.raises(OpenError) as excinfo:
        Document.open(str(path))

    assert excinfo.value.path == str(path)
    assert isinstance(excinfo.value.reason, UnicodeDecodeError)


def test_open_directory_raises_open_error(tmp_path: Path) -> None:
    with pytest.raises(OpenError):
        Document.open(str(tmp_path))

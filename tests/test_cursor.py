"""
Cursor tests.

Validates byte lookahead, consumption, rewinding and whitespace skipping.
"""

from bourne import Cursor


def test_peek_does_not_consume() -> None:
    cursor = Cursor(b"ab")
    assert cursor.peek() == ord("a")
    assert cursor.peek() == ord("a")
    assert cursor.index == 0


def test_next_and_indexed_next() -> None:
    cursor = Cursor(b"xyz")
    assert cursor.next() == ord("x")
    assert cursor.indexed_next() == (1, ord("y"))
    assert cursor.indexed_next() == (2, ord("z"))
    assert cursor.indexed_next() is None
    assert cursor.next() is None
    assert cursor.peek() is None
    assert cursor.is_eof()


def test_advance_and_rewind() -> None:
    cursor = Cursor(b"12345")
    cursor.advance(3)
    assert cursor.peek() == ord("4")
    cursor.rewind()
    assert cursor.index == 2

    start = Cursor(b"1")
    start.rewind()
    assert start.index == 0


def test_matches_literal_at_offset() -> None:
    cursor = Cursor(b"[true]")
    assert not cursor.matches(b"true")
    cursor.advance()
    assert cursor.matches(b"true")
    assert not cursor.matches(b"true]]")

    short = Cursor(b"nul")
    assert not short.matches(b"null")


def test_eat_whitespace_stops_at_content() -> None:
    cursor = Cursor(b" \t\r\n\x0c x")
    cursor.eat_whitespace()
    assert cursor.index == 6
    assert cursor.peek() == ord("x")

    vertical_tab = Cursor(b"\x0bx")
    vertical_tab.eat_whitespace()
    assert vertical_tab.index == 0


def test_eat_whitespace_at_end() -> None:
    cursor = Cursor(b"   ")
    cursor.eat_whitespace()
    assert cursor.is_eof()


def test_from_text_uses_utf8_offsets() -> None:
    cursor = Cursor.from_text("é!")
    assert cursor.length == 3
    assert cursor.text == "é!"
    cursor.advance(2)
    assert cursor.peek() == ord("!")

import pytest

from makegen.cursor import Cursor
from makegen.reader import (
    ReadError,
    read_alloc_literal,
    read_alloc_until,
    read_literal,
    read_n,
    read_until,
)


def test_read_literal_simple():
    cursor = Cursor('"hello" rest')
    assert read_literal(cursor, 100) == "hello"
    assert cursor.getch() == " "


def test_read_literal_escaped_quote():
    cursor = Cursor('"a\\"b"')
    assert read_literal(cursor, 100) == 'a"b'
    assert cursor.at_end()


def test_read_literal_not_on_quote():
    with pytest.raises(ReadError):
        read_literal(Cursor("hello"), 10)


def test_read_literal_unterminated():
    with pytest.raises(ReadError):
        read_literal(Cursor('"hello'), 100)


def test_read_literal_exact_length_leaves_closing_quote():
    cursor = Cursor('"abc"')
    assert read_literal(cursor, 3) == "abc"
    assert cursor.getch() == '"'


def test_read_literal_too_long_for_length():
    with pytest.raises(ReadError):
        read_literal(Cursor('"abcd"'), 3)


def test_read_alloc_literal():
    cursor = Cursor('"x\\"y" tail')
    assert read_alloc_literal(cursor) == 'x"y'
    assert cursor.getch() == " "


def test_read_alloc_literal_errors():
    with pytest.raises(ReadError):
        read_alloc_literal(Cursor("no quote"))
    with pytest.raises(ReadError):
        read_alloc_literal(Cursor('"open'))


def test_read_n():
    cursor = Cursor("abcdef")
    assert read_n(cursor, 3) == "abc"
    assert cursor.position == 3
    assert read_n(cursor, 0) == ""
    assert read_n(cursor, 10) == "def"
    assert cursor.at_end()


def test_read_until_with_pushback():
    cursor = Cursor("abc;def")
    cursor.enable_pushback()
    assert read_until(cursor, 100, ";") == "abc"
    assert cursor.getch() == ";"


def test_read_until_without_pushback():
    cursor = Cursor("abc;def")
    assert read_until(cursor, 100, ";") == "abc"
    assert cursor.getch() == "d"


def test_read_until_length_limit():
    cursor = Cursor("abcdef")
    text = read_until(cursor, 3, ";")
    assert text == "abc"
    assert len(text) == 3


def test_read_alloc_until_always_puts_back():
    cursor = Cursor("key=value")
    assert read_alloc_until(cursor, "=") == "key"
    assert cursor.getch() == "="


def test_read_alloc_until_to_end():
    cursor = Cursor("plain")
    assert read_alloc_until(cursor, ";") == "plain"
    assert cursor.at_end()
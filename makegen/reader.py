"""Reading strings out of a cursor: quoted literals, fixed counts and delimited runs."""

from __future__ import annotations

from makegen.cursor import Cursor

__all__ = [
    "ReadError",
    "read_literal",
    "read_alloc_literal",
    "read_n",
    "read_until",
    "read_alloc_until",
]

_QUOTE = '"'
_ESCAPE = "\\"


class ReadError(ValueError):
    """A literal could not be read from the cursor."""


def _open_literal(cursor: Cursor) -> None:
    if cursor.getch() != _QUOTE:
        raise ReadError(
            f"cursor not positioned on a double quote "
            f"(cursor={cursor.position - 1}, string={cursor.buffer!r})"
        )


def _literal_characters(cursor: Cursor, length: int | None):
    """Yield the characters of a literal, handling escapes, up to ``length`` of them."""
    escaped = False
    written = 0
    while (character := cursor.getch()) is not None:
        if character == _QUOTE and not escaped:
            return
        if character == _ESCAPE and not escaped:
            escaped = True
            continue
        escaped = False
        yield character
        written += 1
        if written == length:
            return


def _missing_quote(cursor: Cursor) -> ReadError:
    return ReadError(
        f"no ending double quote found (cursor={cursor.position}, string={cursor.buffer!r})"
    )


def read_literal(cursor: Cursor, length: int) -> str:
    """Read a double-quoted literal of at most ``length`` characters.

    The cursor must sit on the opening quote. ``\\"`` stands for a quote
    inside the literal. When ``length`` characters are read, the closing
    quote must be the next character and is left unconsumed. Raises
    ReadError when the literal is not opened or not closed.
    """
    _open_literal(cursor)
    text = "".join(_literal_characters(cursor, length))
    written = len(text)
    if written == length and cursor.buffer[cursor.position:cursor.position + 1] != _QUOTE:
        raise _missing_quote(cursor)
    if written < length and cursor.buffer[cursor.position - 1] != _QUOTE:
        raise _missing_quote(cursor)
    return text


def read_alloc_literal(cursor: Cursor) -> str:
    """Read a double-quoted literal of any length; raise ReadError if it is not closed."""
    _open_literal(cursor)
    text = "".join(_literal_characters(cursor, None))
    if cursor.buffer[cursor.position - 1] != _QUOTE:
        raise _missing_quote(cursor)
    return text


def read_n(cursor: Cursor, count: int) -> str:
    """Read up to ``count`` raw characters."""
    characters: list[str] = []
    while len(characters) < count and (character := cursor.getch()) is not None:
        characters.append(character)
    return "".join(characters)


def read_until(cursor: Cursor, length: int, characters: str) -> str:
    """Read until a character in ``characters`` or until ``length`` characters are read.

    The stopping character is put back only when pushback is enabled.
    """
    read: list[str] = []
    while (character := cursor.getch()) is not None:
        if character in characters:
            if cursor.pushback:
                cursor.ungetch()
            break
        read.append(character)
        if len(read) == length:
            break
    return "".join(read)


def read_alloc_until(cursor: Cursor, characters: str) -> str:
    """Read until a character in ``characters``, which is always put back."""
    read: list[str] = []
    while (character := cursor.getch()) is not None:
        if character in characters:
            cursor.ungetch()
            break
        read.append(character)
    return "".join(read)
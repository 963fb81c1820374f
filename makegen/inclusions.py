"""Extraction of the local (double-quoted) header inclusions of a C source file."""

from __future__ import annotations

from makegen.cursor import ALPHA, Cursor
from makegen.options import MakegenError
from makegen.reader import read_alloc_until

__all__ = ["parse_inclusions", "extract_inclusions"]


def _line_has_inclusion(cursor: Cursor) -> bool:
    """Return True if the line at ``cursor`` is a ``#include "..."`` directive."""
    if cursor.getch() != "#":
        return False
    if not cursor.cond_before('"', "\n"):
        return False
    if cursor.cond_before("\n", ALPHA):
        return False
    cursor.enable_pushback()
    cursor.until(ALPHA)
    return cursor.string_expect("include")


def parse_inclusions(text: str) -> list[str]:
    """Return the paths of the double-quoted inclusions in ``text``, in order."""
    cursor = Cursor(text)
    inclusions: list[str] = []
    while not cursor.at_end():
        if not _line_has_inclusion(cursor.copy()):
            cursor.next_line()
            continue
        cursor.enable_pushback()
        cursor.until('"')
        cursor.getch()
        inclusions.append(read_alloc_until(cursor, '"'))
    return inclusions


def extract_inclusions(path: str) -> list[str]:
    """Return the double-quoted inclusions of the file at ``path``.

    Raises MakegenError if the file cannot be opened.
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as source:
            text = source.read()
    except OSError as error:
        raise MakegenError(f"could not open file '{path}' ({error.strerror})") from error
    return parse_inclusions(text)
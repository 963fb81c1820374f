"""A text cursor with line tracking and simple matching primitives."""

from __future__ import annotations

import string as _string
from typing import TextIO

__all__ = [
    "LOWER",
    "UPPER",
    "NUMERIC",
    "ALPHA",
    "ALPHANUM",
    "WHITESPACE",
    "Cursor",
]

LOWER = _string.ascii_lowercase
UPPER = _string.ascii_uppercase
NUMERIC = _string.digits
ALPHA = LOWER + UPPER
ALPHANUM = ALPHA + NUMERIC
WHITESPACE = " \t\v\n\r"


class Cursor:
    """A position in a text buffer, with line and column coordinates.

    When pushback is enabled, a matching operation that stops on a
    character it does not accept puts that character back.
    """

    def __init__(self, buffer: str) -> None:
        self.buffer = buffer
        self.position = 0
        self.line = 0
        self.character = 0
        self.pushback = False

    def __repr__(self) -> str:
        return (
            f"Cursor(position={self.position}, length={self.length}, "
            f"line={self.line}, character={self.character}, pushback={self.pushback})"
        )

    @property
    def length(self) -> int:
        """Length of the buffer."""
        return len(self.buffer)

    @classmethod
    def from_stream(cls, stream: TextIO) -> Cursor:
        """Build a cursor over everything remaining in ``stream``."""
        return cls(stream.read())

    def copy(self) -> Cursor:
        """Return an independent cursor with the same buffer and state."""
        duplicate = Cursor(self.buffer)
        duplicate.position = self.position
        duplicate.line = self.line
        duplicate.character = self.character
        duplicate.pushback = self.pushback
        return duplicate

    def at_end(self) -> bool:
        """Return True once every character has been consumed."""
        return self.position >= self.length

    def getch(self) -> str | None:
        """Consume and return the next character, or None at the end of the buffer."""
        if self.at_end():
            return None
        character = self.buffer[self.position]
        self.position += 1
        if character == "\n":
            self.line += 1
            self.character = 0
        self.character += 1
        return character

    def ungetch(self) -> None:
        """Step back one character; does nothing at the start of the buffer."""
        if self.position == 0:
            return
        self.position -= 1
        if self.buffer[self.position] == "\n":
            self.line -= 1
            previous = self.buffer.rfind("\n", 0, self.position)
            if previous != -1:
                self.character = self.position - 1 - previous
            return
        self.character -= 1

    def unwind(self, distance: int) -> int:
        """Step back up to ``distance`` characters; return how many were stepped back."""
        unwound = 0
        while self.position > 0 and unwound < distance:
            self.ungetch()
            unwound += 1
        return unwound

    def enable_pushback(self) -> None:
        """Put back the rejected character when a match stops."""
        self.pushback = True

    def disable_pushback(self) -> None:
        """Leave the rejected character consumed when a match stops."""
        self.pushback = False

    def _push_back(self) -> None:
        if self.pushback:
            self.ungetch()

    def expect(self, count: int, characters: str) -> bool:
        """Match exactly the next ``count`` characters against ``characters``."""
        matched = 0
        while (character := self.getch()) is not None:
            if character not in characters:
                self._push_back()
                break
            matched += 1
            if matched == count:
                return True
        return False

    def atleast(self, count: int, characters: str) -> bool:
        """Consume every character in ``characters``; True if at least ``count`` were."""
        matched = 0
        while (character := self.getch()) is not None:
            if character not in characters:
                self._push_back()
                break
            matched += 1
        return matched >= count

    def string_expect(self, string: str) -> bool:
        """Match ``string`` at the cursor, consuming it when it matches."""
        matched = 0
        while (character := self.getch()) is not None:
            if matched < len(string) and string[matched] == character:
                matched += 1
                if matched == len(string):
                    return True
                continue
            self._push_back()
            break
        return False

    def strings_expect(self, *args: str) -> int | None:
        """Try each string in turn; return the index of the first that matches.

        The cursor only advances over the matching string. Returns None
        when none of them match.
        """
        position, line, character = self.position, self.line, self.character
        for index, candidate in enumerate(args):
            if self.string_expect(candidate):
                return index
            self.position, self.line, self.character = position, line, character
        return None

    def until(self, characters: str) -> int:
        """Consume characters until one in ``characters``; return how many were consumed."""
        matched = 0
        while (character := self.getch()) is not None:
            if character in characters:
                self._push_back()
                break
            matched += 1
        return matched

    def expect_next(self, characters: str) -> bool:
        """Consume the next character if it is in ``characters``."""
        character = self.getch()
        if character is None:
            return False
        if character not in characters:
            self._push_back()
            return False
        return True

    def next_line(self) -> int:
        """Move to the start of the next line; return the characters skipped before the newline."""
        if not self.at_end() and self.buffer[self.position] == "\n":
            self.getch()
            return 0
        skipped = 0
        while (character := self.getch()) is not None:
            if character == "\n":
                break
            skipped += 1
        return skipped

    def cond_before(self, ch: str, characters: str) -> bool:
        """Return True if ``ch`` occurs ahead of any character in ``characters``.

        The cursor does not move.
        """
        for character in self.buffer[self.position:]:
            if character == ch:
                return True
            if character in characters:
                return False
        return False
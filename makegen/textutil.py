"""Small string helpers: prefix tests, substring counting and replacement."""

from __future__ import annotations

__all__ = [
    "starts_with",
    "count_occurrences",
    "reverse",
    "strip_characters",
    "replaced_size",
    "replace",
]


def starts_with(string: str, start: str) -> bool:
    """Return True if ``string`` begins with ``start``."""
    return string.startswith(start)


def count_occurrences(string: str, sub: str) -> int:
    """Count the occurrences of ``sub`` in ``string``, overlapping ones included.

    An empty ``sub`` is never counted.
    """
    if not sub or len(sub) > len(string):
        return 0
    return sum(1 for position in range(len(string)) if string.startswith(sub, position))


def reverse(string: str) -> str:
    """Return ``string`` with its characters in reverse order."""
    return string[::-1]


def strip_characters(string: str, characters: str) -> str:
    """Return ``string`` with every character found in ``characters`` removed."""
    removed = set(characters)
    return "".join(ch for ch in string if ch not in removed)


def replaced_size(string: str, find: str, replace: str) -> int:
    """Return the length ``string`` would have once every ``find`` became ``replace``."""
    occurrences = count_occurrences(string, find)
    return len(string) - len(find) * occurrences + len(replace) * occurrences


def replace(string: str, find: str, replace: str, size: int) -> tuple[str, int]:
    """Replace every ``find`` in ``string`` with ``replace`` within a limit of ``size``.

    Returns the new string and the number of replacements made. Raises
    ``ValueError`` when ``string`` is already longer than ``size``, when the
    result would not fit in ``size``, or when ``find`` is empty.
    """
    if not find:
        raise ValueError("replace: 'find' cannot be empty")
    if len(string) > size:
        raise ValueError(
            f"replace: string is larger than the buffer. the length of the buffer "
            f"is {size}, and the string's length is {len(string)}."
        )
    if len(find) < len(replace) and replaced_size(string, find, replace) > size:
        raise ValueError("replace: the replaced string would not fit in the buffer")
    occurrences = string.count(find)
    return string.replace(find, replace), occurrences
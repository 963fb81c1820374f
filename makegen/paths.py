"""Path helpers: joining, parent directories and simple filesystem queries."""

from __future__ import annotations

import os
import re

__all__ = [
    "join_path",
    "dirname",
    "exists",
    "is_directory",
    "cwd",
    "make_directory",
    "remove_directory",
]

_SEPARATOR = re.compile(r"/(?=[^/])")


def join_path(*args: str) -> str:
    """Concatenate path components exactly as given, with no separators added."""
    return "".join(args)


def dirname(path: str) -> str:
    """Strip the last component of ``path``.

    The last ``/`` that is followed by a non-``/`` character marks the cut.
    When the path holds only one such separator, its first character is
    kept, so ``./main.c`` becomes ``.`` and ``/usr`` becomes ``/``. A path
    with no such separator is returned unchanged.
    """
    if path == "/":
        return path
    separators = list(_SEPARATOR.finditer(path))
    if not separators:
        return path
    if len(separators) == 1:
        return path[:1]
    return path[: separators[-1].start()]


def exists(path: str) -> bool:
    """Return True if ``path`` exists."""
    return os.path.exists(path)


def is_directory(path: str) -> bool:
    """Return True if ``path`` is a directory."""
    return os.path.isdir(path)


def cwd() -> str:
    """Return the current working directory."""
    return os.getcwd()


def make_directory(path: str, mode: int) -> None:
    """Create the directory ``path`` with permissions ``mode``; raises OSError on failure."""
    os.mkdir(path, mode)


def remove_directory(path: str) -> None:
    """Remove the empty directory ``path``; raises OSError on failure."""
    os.rmdir(path)
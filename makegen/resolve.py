"""Resolve an inclusion path relative to the source file that includes it."""

from __future__ import annotations

from makegen.paths import dirname
from makegen.textutil import count_occurrences

__all__ = ["resolve_path"]

_PARENT = "../"


def resolve_path(source_path: str, header_path: str) -> str:
    """Return the path of ``header_path`` as included from ``source_path``.

    A header that does not start with ``../`` is placed in the source
    file's directory. Otherwise each leading ``../`` removes one directory
    from the source file's directory before the rest is appended.
    """
    directory = dirname(source_path)
    if not header_path.startswith(_PARENT):
        return f"{directory}/{header_path}"

    parent_references = count_occurrences(header_path, _PARENT)
    remainder = header_path[len(_PARENT) * parent_references:]
    for _ in range(parent_references):
        directory = dirname(directory)
    return f"{directory}/{remainder}"
"""Target and dialect names, and lookup and checking of command-line options."""

from __future__ import annotations

import enum
from collections.abc import Mapping

__all__ = [
    "MakegenError",
    "UsageError",
    "Target",
    "Dialect",
    "enumerate_target",
    "enumerate_dialect",
    "get_option_with_default",
    "verify_project_options",
    "verify_library_options",
]

HELP_HINT = "Try 'makegen --help' for more information."


class MakegenError(Exception):
    """Base class for errors reported by makegen."""


class UsageError(MakegenError):
    """The command line was not valid."""

    hint = HELP_HINT


class Target(enum.Enum):
    """The kind of Makefile to produce."""

    PROJECT = "project"
    LIBRARY = "library"


class Dialect(enum.Enum):
    """The dialect of make to produce a Makefile for."""

    UNIX = "unix"


def enumerate_target(name: str) -> Target:
    """Return the Target named ``name``; raise UsageError for an unknown one."""
    try:
        return Target(name)
    except ValueError:
        raise UsageError(f"unknown project type '{name}'") from None


def enumerate_dialect(name: str) -> Dialect:
    """Return the Dialect named ``name``; raise UsageError for an unknown one."""
    try:
        return Dialect(name)
    except ValueError:
        raise UsageError(f"unknown dialect type '{name}'") from None


def get_option_with_default(
    options: Mapping[str, str],
    longform: str,
    shortform: str,
    default: str | None,
) -> str | None:
    """Return the value of an option by its long form, then its short form, else ``default``.

    ``options`` maps each given option flag to its parameter.
    """
    if longform in options:
        return options[longform]
    if shortform in options:
        return options[shortform]
    return default


def verify_project_options(options: Mapping[str, str]) -> None:
    """Raise UsageError unless both --binary and --main are given."""
    for longform, shortform in (("--binary", "-b"), ("--main", "-m")):
        if get_option_with_default(options, longform, shortform, None) is None:
            raise UsageError("projects must have --binary and --main options given")


def verify_library_options(options: Mapping[str, str]) -> None:
    """Raise UsageError unless --name is given."""
    if get_option_with_default(options, "--name", "-n", None) is None:
        raise UsageError("libraries must have the --name option given")
"""Command-line entry point: parse arguments, collect files and write a Makefile."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

from makegen import unix
from makegen.options import (
    Dialect,
    MakegenError,
    Target,
    UsageError,
    enumerate_dialect,
    enumerate_target,
)
from makegen.paths import is_directory

__all__ = ["collect_source_files", "parse_arguments", "main"]

USAGE = (
    "Usage: makegen TARGET DIALECT [ --help | -h ] [ --src SRC | -s SRC]\n"
    "                              [ --tests TESTS | -t SRC ] [ --main MAIN | -m MAIN ]\n"
    "                              [ --binary BINARY | -b BINARY ] [ --name NAME | -n NAME ]\n"
    "                              [ --ldflags FLAGS | -l FLAGS ] [ --ldlibs LIBS | -L LIBS ]\n"
    "                              [ --cflags FLAGS | -c FLAGS ]\n"
    "\n"
    "Generate different types of Makefiles\n"
    "\n"
    "Positional arguments:\n"
    "\ttarget\t\t\tthe type of Makefile to create\n"
    "\tdialect\t\t\tthe dialect of Makefile to create\n"
    "\n"
    "Options:\n"
    "\t--help, -h\t\tdisplay this message\n"
    "\t--src, -s\t\tthe directory containing source code\n"
    "\t--tests, -t\t\tthe directory containing test programs\n"
    "\t--main, -m\t\tthe file containing the entry point\n"
    "\t--binary, -b\t\tthe name of the binary\n"
    "\t--name, -n\t\tthe name of the library and shared object\n"
    "\t--ldflags, -l\t\tflags and options to pass to the linker\n"
    "\t--ldlibs, -L\t\tlibraries to link\n"
    "\t--cflags, -c\t\tflags and options to pass to the compiler\n"
)

_POSITIONALS = ("target", "dialect")

# Each option flag, long and short, with the number of parameters it takes.
_OPTIONS = {
    "--help": 0, "-h": 0,
    "--src": 1, "-s": 1,
    "--tests": 1, "-t": 1,
    "--main": 1, "-m": 1,
    "--binary": 1, "-b": 1,
    "--name": 1, "-n": 1,
    "--ldflags": 1, "-l": 1,
    "--ldlibs": 1, "-L": 1,
    "--cflags": 1, "-c": 1,
}


def collect_source_files(root: str = ".") -> list[str]:
    """Return every file below ``root``, each path written as ``root/.../name``.

    Directories are walked depth first; entries of one directory are taken
    in name order. Raises MakegenError if a directory cannot be read.
    """
    files: list[str] = []
    directories = [root]
    while directories:
        directory = directories.pop()
        try:
            names = sorted(entry.name for entry in os.scandir(directory))
        except OSError as error:
            raise MakegenError(f"child path '{directory}' could not be opened") from error
        for name in names:
            path = f"{directory}/{name}"
            if is_directory(path):
                directories.append(path)
            else:
                files.append(path)
    return files


def parse_arguments(argv: Sequence[str]) -> tuple[Target, Dialect, dict[str, str]]:
    """Parse ``argv`` into the target, the dialect and a map of given option flags.

    A parameter that starts with a hyphen is not taken as a parameter; a
    leading backslash escapes one. With --help or -h, the usage is printed
    and SystemExit(1) is raised. Raises UsageError for a bad command line.
    """
    if "--help" in argv or "-h" in argv:
        sys.stdout.write(USAGE)
        raise SystemExit(1)

    positionals: list[str] = []
    options: dict[str, str] = {}
    tokens = iter(argv)
    for token in tokens:
        if token.startswith("-") and len(token) > 1:
            if token not in _OPTIONS:
                raise UsageError(f"unknown option '{token}'")
            value = ""
            if _OPTIONS[token]:
                value = next(tokens, None)
                if value is None or value.startswith("-"):
                    raise UsageError(f"option '{token}' expects a parameter")
            options.setdefault(token, value)
            continue
        if len(positionals) == len(_POSITIONALS):
            raise UsageError(f"unexpected argument '{token}'")
        positionals.append(token)

    if len(positionals) < len(_POSITIONALS):
        raise UsageError(f"missing argument '{_POSITIONALS[len(positionals)]}'")

    target = enumerate_target(positionals[0])
    dialect = enumerate_dialect(positionals[1])
    return target, dialect, options


def main(argv: Sequence[str] | None = None) -> int:
    """Run makegen on ``argv`` (the process arguments by default); return the exit status."""
    arguments = list(sys.argv[1:] if argv is None else argv)
    try:
        target, _dialect, options = parse_arguments(arguments)
        files = collect_source_files(".")
        if target is Target.PROJECT:
            unix.project_makefile(options, files, sys.stdout)
        else:
            unix.library_makefile(options, files, sys.stdout)
    except UsageError as error:
        sys.stderr.write(f"makegen: {error}\n{error.hint}\n")
        return 1
    except MakegenError as error:
        sys.stderr.write(f"makegen: {error}\n")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
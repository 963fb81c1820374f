"""Makefile generation for Watcom make."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator, Mapping
from typing import TextIO

from makegen.inclusions import extract_inclusions
from makegen.options import (
    get_option_with_default,
    verify_library_options,
    verify_project_options,
)
from makegen.resolve import resolve_path

__all__ = [
    "build_stddir_path",
    "objs_variable",
    "testobjs_variable",
    "tests_variable",
    "headers_variable",
    "source_targets",
    "tests_targets",
    "project_makefile",
    "library_makefile",
]

_PREFIX = ".\\"


def build_stddir_path(
    options: Mapping[str, str],
    longform: str,
    shortform: str,
    default_path: str,
) -> str:
    """Return the option's directory (or ``default_path``), always prefixed with ``.\\``."""
    directory = get_option_with_default(options, longform, shortform, default_path)
    if directory.startswith(_PREFIX):
        return directory
    return _PREFIX + directory


def _files_in(files: Iterable[str], directory: str, letter: str) -> Iterator[str]:
    """Yield the files under ``directory`` whose extension is ``.letter``."""
    suffix = "." + letter
    return (path for path in files if path.startswith(directory) and path.endswith(suffix))


def _object_path(path: str) -> str:
    # The last three characters of the path are overwritten with "obj".
    return path[:-3] + "obj"


def _binary_path(path: str) -> str:
    return path[:-2]


def _variable(name: str, values: Iterable[str]) -> str:
    # Every value is followed by a space, the last one included.
    return name + "=" + "".join(f"{value} " for value in values) + "\n"


def objs_variable(options: Mapping[str, str], files: Iterable[str]) -> str:
    """Return the ``OBJS=`` line: an object file for every C file in the source directory."""
    source_path = build_stddir_path(options, "--src", "-s", ".\\src")
    return _variable("OBJS", (_object_path(path) for path in _files_in(files, source_path, "c")))


def testobjs_variable(options: Mapping[str, str], files: Iterable[str]) -> str:
    """Return the ``TESTOBJS=`` line: the object files of the sources, less the main file."""
    main_path = build_stddir_path(options, "--main", "-m", ".\\src\\main.c")
    source_path = build_stddir_path(options, "--src", "-s", ".\\src")
    return _variable(
        "TESTOBJS",
        (
            _object_path(path)
            for path in _files_in(files, source_path, "c")
            if path != main_path
        ),
    )


def tests_variable(options: Mapping[str, str], files: Iterable[str]) -> str:
    """Return the ``TESTS=`` line: a binary for every C file in the tests directory."""
    tests_path = build_stddir_path(options, "--tests", "-t", ".\\tests")
    return _variable("TESTS", (_binary_path(path) for path in _files_in(files, tests_path, "c")))


def headers_variable(options: Mapping[str, str], files: Iterable[str]) -> str:
    """Return the ``HEADERS=`` line: every header in the source directory."""
    source_path = build_stddir_path(options, "--src", "-s", ".\\src")
    return _variable("HEADERS", _files_in(files, source_path, "h"))


def _resolved_inclusions(path: str) -> list[str]:
    return [resolve_path(path, header) for header in extract_inclusions(path)]


def source_targets(options: Mapping[str, str], files: Iterable[str]) -> str:
    """Return a rule building each source file into an object, with its headers as prerequisites."""
    source_path = build_stddir_path(options, "--src", "-s", ".\\src")
    rules: list[str] = []
    for path in _files_in(files, source_path, "c"):
        object_file = _object_path(path)
        headers = "".join(f" {header}" for header in _resolved_inclusions(path))
        rules.append(
            f"{object_file}: {path}{headers}\n"
            f"\t$(CC) -bt=$(SYSTEM) $(CFLAGS) {path} -o {object_file}\n"
            "\n"
        )
    return "".join(rules)


def tests_targets(options: Mapping[str, str], files: Iterable[str], objs: str) -> str:
    """Return a rule compiling each test file and linking it with the ``objs`` variable."""
    tests_path = build_stddir_path(options, "--tests", "-t", "./tests")
    rules: list[str] = []
    for path in _files_in(files, tests_path, "c"):
        binary_file = _binary_path(path)
        headers = "".join(f" {header} " for header in _resolved_inclusions(path))
        rules.append(
            f"{binary_file}: {path}{headers}$({objs})\n"
            f"\t$(CC) -bt=$(SYSTEM) {path} -o {binary_file} $(CFLAGS)\n"
            f"\t$(LD) system $(SYSTEM) name {binary_file} file {{{objs}}} $(LDFLAGS) $(LDLIBS)\n"
            "\n"
        )
    return "".join(rules)


def _escaped_parameter(template: str, value: str | None) -> str:
    """Format an optional parameter, dropping one leading backslash used to escape hyphens."""
    if value is None:
        return ""
    if value.startswith("\\"):
        value = value[1:]
    return template.format(value)


def _flag_variables(options: Mapping[str, str]) -> str:
    cflags = get_option_with_default(options, "--cflags", "-c", None)
    ldflags = get_option_with_default(options, "--ldflags", "-l", None)
    ldlibs = get_option_with_default(options, "--ldlibs", "-L", None)
    return (
        _escaped_parameter("LDFLAGS={}\n", ldflags)
        + _escaped_parameter("LDLIBS={}\n", ldlibs)
        + _escaped_parameter("CFLAGS={}\n", cflags)
    )


def project_makefile(
    options: Mapping[str, str],
    files: Iterable[str],
    stream: TextIO | None = None,
) -> None:
    """Write a Watcom Makefile for a program to ``stream`` (stdout by default).

    Raises UsageError unless --binary and --main are given.
    """
    verify_project_options(options)
    out = sys.stdout if stream is None else stream
    files = list(files)
    binary = get_option_with_default(options, "--binary", "-b", None)
    system = get_option_with_default(options, "--system", "-s", "nt")

    out.write(objs_variable(options, files))
    out.write(testobjs_variable(options, files))
    out.write(tests_variable(options, files))
    out.write("CC=wcc386\n")
    out.write("LD=wlink\n")
    out.write(_flag_variables(options))
    out.write(_escaped_parameter("SYSTEM={}\n", system))
    out.write("\n")

    out.write(f"all: $(OBJS) $(TESTS) {binary}\n\n")
    out.write(
        "clean:\n"
        "\tdel $(OBJS)\n"
        "\tdel $(TESTS)\n"
        f"\tdel {binary}\n\n"
    )

    out.write(tests_targets(options, files, "TESTOBJS"))
    out.write(source_targets(options, files))

    out.write(f"{binary}: $(OBJS)\n")
    out.write(f"\t$(LD) $(LDFLAGS) system $(SYSTEM) name {binary} file {{$(OBJS)}}\n")


def library_makefile(
    options: Mapping[str, str],
    files: Iterable[str],
    stream: TextIO | None = None,
) -> None:
    """Write a Watcom Makefile for a static library to ``stream`` (stdout by default).

    Raises UsageError unless --name is given.
    """
    verify_library_options(options)
    out = sys.stdout if stream is None else stream
    files = list(files)
    name = get_option_with_default(options, "--name", "-n", None)

    out.write(objs_variable(options, files))
    out.write(tests_variable(options, files))
    out.write(headers_variable(options, files))
    out.write("CC=wcc386\n")
    out.write("LD=wlink\n")
    out.write("LIB=wlib\n")
    out.write(_flag_variables(options))
    out.write("\n")

    out.write(f"all: $(OBJS) $(TESTS) {name}.lib\n\n")
    out.write(
        "clean:\n"
        "\tdel $(OBJS)\n"
        "\tdel $(TESTS)\n"
        f"\tdel {name}.lib\n\n"
    )

    out.write(tests_targets(options, files, "OBJS"))
    out.write(source_targets(options, files))

    out.write(f"{name}.lib: $(OBJS)\n")
    out.write(f"\t$(LIB) {name} +{{$OBJS)}}\n")
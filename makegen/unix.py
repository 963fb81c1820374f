"""Makefile generation for POSIX make running under a Unix-like system."""

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

_PREFIX = "./"


def build_stddir_path(
    options: Mapping[str, str],
    longform: str,
    shortform: str,
    default_path: str,
) -> str:
    """Return the option's directory (or ``default_path``), always prefixed with ``./``."""
    directory = get_option_with_default(options, longform, shortform, default_path)
    if directory.startswith(_PREFIX):
        return directory
    return _PREFIX + directory


def _has_extension(path: str, letter: str) -> bool:
    return path.endswith("." + letter)


def _files_in(files: Iterable[str], directory: str, letter: str) -> Iterator[str]:
    """Yield the files under ``directory`` whose extension is ``.letter``."""
    return (
        path for path in files if path.startswith(directory) and _has_extension(path, letter)
    )


def _object_path(path: str) -> str:
    return path[:-1] + "o"


def _binary_path(path: str) -> str:
    return path[:-2]


def _variable(name: str, values: Iterable[str]) -> str:
    # Every value is followed by a space, the last one included.
    return name + "=" + "".join(f"{value} " for value in values) + "\n"


def objs_variable(options: Mapping[str, str], files: Iterable[str]) -> str:
    """Return the ``OBJS=`` line: an object file for every C file in the source directory."""
    source_path = build_stddir_path(options, "--src", "-s", "./src")
    return _variable("OBJS", (_object_path(path) for path in _files_in(files, source_path, "c")))


def testobjs_variable(options: Mapping[str, str], files: Iterable[str]) -> str:
    """Return the ``TESTOBJS=`` line: the object files of the sources, less the main file."""
    main_path = build_stddir_path(options, "--main", "-m", "./src/main.c")
    source_path = build_stddir_path(options, "--src", "-s", "./src")
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
    tests_path = build_stddir_path(options, "--tests", "-t", "./tests")
    return _variable("TESTS", (_binary_path(path) for path in _files_in(files, tests_path, "c")))


def headers_variable(options: Mapping[str, str], files: Iterable[str]) -> str:
    """Return the ``HEADERS=`` line: every header in the source directory."""
    source_path = build_stddir_path(options, "--src", "-s", "./src")
    return _variable("HEADERS", _files_in(files, source_path, "h"))


def _resolved_inclusions(path: str) -> list[str]:
    return [resolve_path(path, header) for header in extract_inclusions(path)]


def source_targets(options: Mapping[str, str], files: Iterable[str]) -> str:
    """Return a rule building each source file into an object, with its headers as prerequisites."""
    source_path = build_stddir_path(options, "--src", "-s", "./src")
    rules: list[str] = []
    for path in _files_in(files, source_path, "c"):
        object_file = _object_path(path)
        headers = "".join(f" {header}" for header in _resolved_inclusions(path))
        rules.append(
            f"{object_file}: {path}{headers}\n"
            f"\t$(CC) -c $(CFLAGS) {path} -o {object_file}\n"
            "\n"
        )
    return "".join(rules)


def tests_targets(options: Mapping[str, str], files: Iterable[str], objs: str) -> str:
    """Return a rule building each test file into a binary linked with ``$(objs)``."""
    tests_path = build_stddir_path(options, "--tests", "-t", "./tests")
    rules: list[str] = []
    for path in _files_in(files, tests_path, "c"):
        binary_file = _binary_path(path)
        headers = "".join(f" {header} " for header in _resolved_inclusions(path))
        rules.append(
            f"{binary_file}: {path}{headers}$({objs})\n"
            f"\t$(CC) {path} -o {binary_file} $({objs}) $(CFLAGS) $(LDFLAGS) $(LDLIBS)\n"
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
        + _escaped_parameter("CFLAGS=-fpic {}\n", cflags)
        + "\n"
    )


def project_makefile(
    options: Mapping[str, str],
    files: Iterable[str],
    stream: TextIO | None = None,
) -> None:
    """Write a Makefile for a program with a final binary to ``stream`` (stdout by default).

    Raises UsageError unless --binary and --main are given.
    """
    verify_project_options(options)
    out = sys.stdout if stream is None else stream
    files = list(files)
    binary = get_option_with_default(options, "--binary", "-b", None)

    out.write(objs_variable(options, files))
    out.write(testobjs_variable(options, files))
    out.write(tests_variable(options, files))
    out.write("CC=cc\n")
    out.write("PREFIX=/usr/local\n")
    out.write(_flag_variables(options))

    out.write(f"all: $(OBJS) $(TESTS) {binary}\n\n")
    out.write(
        "clean:\n"
        "\trm -rf $(OBJS)\n"
        "\trm -rf $(TESTS)\n"
        "\trm -rf vgcore.*\n"
        "\trm -rf core*\n"
        f"\trm -rf {binary}\n\n"
    )
    out.write(
        "install:\n"
        "\tmkdir -p $(PREFIX)\n"
        "\tmkdir -p $(PREFIX)/bin\n"
        f"\tinstall -m 755 {binary} $(PREFIX)/bin\n\n"
    )
    out.write(f"uninstall:\n\trm -f $(PREFIX)/bin/{binary}\n\n")

    out.write(tests_targets(options, files, "TESTOBJS"))
    out.write(source_targets(options, files))

    out.write(f"{binary}: $(OBJS)\n")
    out.write(f"\t$(CC) $(OBJS) -o {binary} $(LDFLAGS) $(LDLIBS)\n")


def library_makefile(
    options: Mapping[str, str],
    files: Iterable[str],
    stream: TextIO | None = None,
) -> None:
    """Write a Makefile for a shared and static library to ``stream`` (stdout by default).

    Raises UsageError unless --name is given.
    """
    verify_library_options(options)
    out = sys.stdout if stream is None else stream
    files = list(files)
    name = get_option_with_default(options, "--name", "-n", None)

    out.write(objs_variable(options, files))
    out.write(tests_variable(options, files))
    out.write(headers_variable(options, files))
    out.write("CC=cc\n")
    out.write("PREFIX=/usr/local\n")
    out.write(_flag_variables(options))

    out.write(f"all: $(OBJS) $(TESTS) {name}.so {name}.a\n\n")
    out.write(
        "clean:\n"
        "\trm -rf $(OBJS)\n"
        "\trm -rf $(TESTS)\n"
        "\trm -rf vgcore.*\n"
        "\trm -rf core*\n"
        f"\trm -rf {name}.so\n\n"
    )
    out.write(
        "install:\n"
        "\tmkdir -p $(PREFIX)\n"
        "\tmkdir -p $(PREFIX)/lib\n"
        "\tmkdir -p $(PREFIX)/include\n"
        f"\tmkdir -p $(PREFIX)/include/{name}\n"
        f"\tinstall -m 755 {name}.so $(PREFIX)/lib\n"
        f"\tinstall -m 755 {name}.a $(PREFIX)/lib\n"
        f"\tinstall -m 644 $(HEADERS) $(PREFIX)/include/{name}\n\n"
    )
    out.write(
        "uninstall:\n"
        f"\trm -rf $(PREFIX)/include/{name}\n"
        f"\trm -f $(PREFIX)/lib/{name}.so\n\n"
        f"\trm -f $(PREFIX)/lib/{name}.a\n\n"
    )

    out.write(tests_targets(options, files, "OBJS"))
    out.write(source_targets(options, files))

    out.write(f"{name}.so: $(OBJS)\n")
    out.write(f"\t$(CC) $(OBJS) -shared -o {name}.so\n")
    out.write(f"{name}.a: $(OBJS)\n")
    out.write(f"\tar crv {name}.a $(OBJS)\n")
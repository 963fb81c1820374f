import io
from pathlib import Path

import pytest

from makegen import watcom
from makegen.options import UsageError
from makegen.resolve import resolve_path

MAIN = ".\\src\\main.c"
UTIL = ".\\src\\util.c"
HEADER = ".\\src\\util.h"
TEST = ".\\tests\\check.c"
FILES = [MAIN, UTIL, HEADER, TEST, ".\\docs\\readme.c"]


def _write(name, text):
    path = Path(name)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)


def _entries(line, name):
    assert line.startswith(name + "=")
    assert line.endswith("\n")
    return line[len(name) + 1:].split()


def test_build_stddir_path_default():
    assert watcom.build_stddir_path({}, "--src", "-s", ".\\src") == ".\\src"


def test_build_stddir_path_adds_prefix():
    assert watcom.build_stddir_path({"--src": "lib"}, "--src", "-s", ".\\src") == ".\\lib"


def test_build_stddir_path_short_form_kept_when_prefixed():
    result = watcom.build_stddir_path({"-s": ".\\code"}, "--src", "-s", ".\\src")
    assert result == ".\\code"


def test_objs_variable_selects_source_c_files():
    entries = _entries(watcom.objs_variable({}, FILES), "OBJS")
    assert len(entries) == 2
    assert all(entry.endswith("obj") for entry in entries)
    assert all(entry.startswith(".\\src") for entry in entries)


def test_objs_variable_trailing_space():
    line = watcom.objs_variable({}, [UTIL])
    assert line.endswith(" \n")


def test_objs_variable_empty():
    assert watcom.objs_variable({}, []) == "OBJS=\n"


def test_testobjs_variable_excludes_main():
    entries = _entries(watcom.testobjs_variable({}, FILES), "TESTOBJS")
    assert entries == _entries(watcom.objs_variable({}, [UTIL]), "OBJS")


def test_testobjs_variable_respects_main_option():
    entries = _entries(watcom.testobjs_variable({"--main": UTIL}, FILES), "TESTOBJS")
    assert entries == _entries(watcom.objs_variable({}, [MAIN]), "OBJS")


def test_tests_variable_strips_extension():
    assert _entries(watcom.tests_variable({}, FILES), "TESTS") == [TEST[:-2]]


def test_headers_variable_lists_headers():
    assert _entries(watcom.headers_variable({}, FILES), "HEADERS") == [HEADER]


def test_source_targets_without_inclusions(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write(UTIL, "int x;\n")
    rules = watcom.source_targets({}, [UTIL])
    obj = _entries(watcom.objs_variable({}, [UTIL]), "OBJS")[0]
    assert rules == f"{obj}: {UTIL}\n\t$(CC) -bt=$(SYSTEM) $(CFLAGS) {UTIL} -o {obj}\n\n"


def test_source_targets_lists_inclusions(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write(UTIL, '#include "util.h"\n#include <stdio.h>\nint x;\n')
    first_line = watcom.source_targets({}, [UTIL]).splitlines()[0]
    assert first_line.endswith(f"{UTIL} {resolve_path(UTIL, 'util.h')}")


def test_tests_targets_links_with_objs(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write(TEST, "int main(void) { return 0; }\n")
    rules = watcom.tests_targets({"--tests": ".\\tests"}, [TEST], "TESTOBJS")
    binary = TEST[:-2]
    assert rules.splitlines() == [
        f"{binary}: {TEST}$(TESTOBJS)",
        f"\t$(CC) -bt=$(SYSTEM) {TEST} -o {binary} $(CFLAGS)",
        f"\t$(LD) system $(SYSTEM) name {binary} file {{TESTOBJS}} $(LDFLAGS) $(LDLIBS)",
        "",
    ]


def test_tests_targets_default_directory_does_not_match_backslash_paths():
    assert watcom.tests_targets({}, [TEST], "OBJS") == ""


def test_project_makefile_requires_binary():
    with pytest.raises(UsageError):
        watcom.project_makefile({"--main": MAIN}, [], io.StringIO())


def test_project_makefile_contents():
    out = io.StringIO()
    watcom.project_makefile({"--binary": "app", "--main": MAIN}, [], out)
    text = out.getvalue()
    assert "CC=wcc386\nLD=wlink\n" in text
    assert "SYSTEM=nt\n" in text
    assert "all: $(OBJS) $(TESTS) app\n\n" in text
    assert "clean:\n\tdel $(OBJS)\n\tdel $(TESTS)\n\tdel app\n\n" in text
    assert text.endswith(
        "app: $(OBJS)\n\t$(LD) $(LDFLAGS) system $(SYSTEM) name app file {$(OBJS)}\n"
    )


def test_project_makefile_escaped_flags():
    out = io.StringIO()
    options = {"--binary": "app", "--main": MAIN, "--cflags": "\\-O2", "--ldlibs": "-lm"}
    watcom.project_makefile(options, [], out)
    text = out.getvalue()
    assert "CFLAGS=-O2\n" in text
    assert "LDLIBS=-lm\n" in text
    assert "LDFLAGS=" not in text


def test_project_makefile_defaults_to_stdout(capsys):
    watcom.project_makefile({"-b": "tool", "-m": MAIN}, [])
    assert capsys.readouterr().out.startswith("OBJS=\nTESTOBJS=\nTESTS=\n")


def test_library_makefile_requires_name():
    with pytest.raises(UsageError):
        watcom.library_makefile({}, [], io.StringIO())


def test_library_makefile_contents():
    out = io.StringIO()
    watcom.library_makefile({"--name": "mylib"}, [HEADER], out)
    text = out.getvalue()
    assert text.startswith("OBJS=\nTESTS=\nHEADERS=")
    assert "LIB=wlib\n" in text
    assert "SYSTEM=" not in text
    assert "all: $(OBJS) $(TESTS) mylib.lib\n\n" in text
    assert "\tdel mylib.lib\n\n" in text
    assert text.endswith("mylib.lib: $(OBJS)\n\t$(LIB) mylib +{$OBJS)}\n")
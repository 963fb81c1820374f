import pytest

from makegen.inclusions import extract_inclusions, parse_inclusions
from makegen.options import MakegenError

SOURCE = (
    '#include "a.h"\n'
    "#include <stdio.h>\n"
    '#   include "b/c.h"\n'
    "int x;\n"
    '#include "../d.h"\n'
)


def test_parse_local_inclusions_only():
    assert parse_inclusions(SOURCE) == ["a.h", "b/c.h", "../d.h"]


def test_parse_ignores_other_directives():
    assert parse_inclusions('#define NAME "value"\nint y;\n') == []


def test_parse_requires_hash_at_line_start():
    assert parse_inclusions('  #include "a.h"\n') == []


def test_parse_empty_text():
    assert parse_inclusions("") == []


def test_parse_without_trailing_newline():
    assert parse_inclusions('#include "last.h"') == ["last.h"]


def test_parse_blank_lines_between():
    text = '\n\n#include "x.h"\n\n#include "y.h"\n'
    assert parse_inclusions(text) == ["x.h", "y.h"]


def test_extract_from_file(tmp_path):
    source = tmp_path / "main.c"
    source.write_text(SOURCE)
    assert extract_inclusions(str(source)) == parse_inclusions(SOURCE)


def test_extract_missing_file(tmp_path):
    with pytest.raises(MakegenError):
        extract_inclusions(str(tmp_path / "missing.c"))
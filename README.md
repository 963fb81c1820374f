# makegen

`makegen` writes a Makefile for a C program or library. It walks the
current directory, finds the source files, test programs and headers, and
prints a Makefile to standard output. Each object and test target lists the
local headers that its source file includes directly (`#include "..."`), so
changing a header rebuilds everything that depends on it.

## Installation

```
pip install .
```

## Usage

Run it from the root of your project:

```
makegen TARGET DIALECT [options] > Makefile
```

`TARGET` is one of:

| Target    | Description                                        | Required options     |
|-----------|----------------------------------------------------|----------------------|
| `project` | a program that results in a final binary           | `--binary`, `--main` |
| `library` | a library built into a shared object and an archive | `--name`            |

`DIALECT` is the flavour of make to write for. The command accepts `unix`,
which produces a POSIX Makefile meant to run on a Unix-like system.

### Options

| Option                          | Meaning                                              |
|---------------------------------|------------------------------------------------------|
| `--help`, `-h`                  | print a short help message and exit with status 1    |
| `--src SRC`, `-s SRC`           | directory holding the source code (default `./src`)  |
| `--tests TESTS`, `-t TESTS`     | directory holding test programs (default `./tests`)  |
| `--main MAIN`, `-m MAIN`        | file with the program's entry point                  |
| `--binary BINARY`, `-b BINARY`  | name of the final binary                             |
| `--name NAME`, `-n NAME`        | name of the library and shared object                |
| `--ldflags FLAGS`, `-l FLAGS`   | flags passed to the linker                           |
| `--ldlibs LIBS`, `-L LIBS`      | libraries to link                                    |
| `--cflags FLAGS`, `-c FLAGS`    | flags passed to the compiler                         |

Directories given without a leading `./` get one added, since the files
found by the walk are written as `./path/to/file`.

A value that begins with a hyphen is not accepted as an option's parameter.
To pass one, put a backslash in front; the backslash is dropped when the
value is written into the Makefile:

```
makegen project unix --binary app --main src/main.c --cflags '\-Wall -O2'
```

Errors (an unknown target or dialect, a missing required option, an
unknown option) are reported on standard error, and the command exits with
status 1.

### Examples

A program:

```
makegen project unix --binary hello --main src/main.c > Makefile
```

A library, with its headers installed under `$(PREFIX)/include/mylib`:

```
makegen library unix --name mylib > Makefile
```

The generated Makefile has `all`, `clean`, `install` and `uninstall`
targets, a rule for every object file and test program, and rules for the
binary (projects) or the `.so` and `.a` files (libraries).

## Using it from Python

The Makefile writers can be called directly. `parse_arguments` returns the
target, the dialect and a mapping of the option flags that were given:

```python
import sys
from makegen import cli, unix

target, dialect, options = cli.parse_arguments(
    ["project", "unix", "--binary", "hello", "--main", "src/main.c"]
)
files = cli.collect_source_files(".")
unix.project_makefile(options, files, sys.stdout)
```

`makegen.watcom` has the same functions (`project_makefile`,
`library_makefile` and the variable and target helpers) and writes
Makefiles for Watcom make, with `.obj` object files and `.\` directory
prefixes.

Other pieces that can be used on their own:

- `makegen.inclusions.extract_inclusions(path)` and
  `parse_inclusions(text)` list the local headers a source file includes.
- `makegen.resolve.resolve_path(source, header)` turns such an inclusion
  into a path relative to the project root, following leading `../`.
- `makegen.options` holds the `Target` and `Dialect` enums, option lookup
  and the `MakegenError` and `UsageError` exceptions.
- `makegen.cursor.Cursor` and `makegen.reader` are the small text-matching
  tools used to read source files.

## What it does not do

The `makegen` command writes only `unix` Makefiles; Watcom Makefiles are
available only through `makegen.watcom` from Python. No other dialects of
make are supported. Only inclusions written with double quotes are
followed, and only one level deep: headers included by headers are not
listed as dependencies.
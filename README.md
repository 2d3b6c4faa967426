# buildkit

Building blocks for a formatter and linter of Starlark files (`BUILD`,
`WORKSPACE`, `MODULE.bazel`, `.bzl`, `.star`, `.sky`): the formatter's
configuration and its validation rules, discovery of Starlark files,
per-file diagnostics in text or JSON form, temporary-file bookkeeping and
invocation of an external diff program.

The package has no runtime dependencies beyond the standard library.

## What it does not do

The package does not parse, format or lint Starlark code itself, and it
installs no command. It supplies the pieces around a formatter: settings,
file discovery, reporting and diff display. Lint findings are passed in by
the caller as `Finding` objects.

## Configuration

`buildkit.config.Config` holds every formatter setting. It can be loaded
from a `.buildifier.json` file and then overridden by command-line style
arguments:

```python
from buildkit.config import Config, find_config_path, example

config = Config()
path = find_config_path("")          # BUILDIFIER_CONFIG, or the nearest .buildifier.json
if path:
    config.config_path = path
    config.load_file()

files = config.parse_args(["--mode=check", "--lint=warn", "--warnings=+print,-no-effect", "BUILD"])
config.validate(files)               # raises ConfigError on bad combinations
print(config.lint_warnings)

print(example().to_json())           # a sample configuration file
```

`find_config_path` honours the `BUILDIFIER_CONFIG` environment variable;
otherwise it searches the given directory (or the working directory) and
its parents for a regular file named `.buildifier.json`, returning `""`
when there is none.

`parse_args` accepts flags in `-name`, `--name`, `-name=value` and
`-name value` forms and returns the remaining arguments. The flags are
`help`, `version`, `v`, `d`, `r`, `multi_diff`, `mode`, `format`,
`diff_command`, `lint`, `warnings`, `path`, `tables`, `add_tables`,
`type`, `config`, `allowsort` and `buildifier_disable` (the last two may be
repeated). `make_parser` returns the underlying flag set; current values
act as defaults, while `help`, `version` and `config_path` are reset.

`validate` fills in defaults (mode `fix`, lint `off`), checks that the
modes, input type and output format go together, refuses more than one
file with `-path` or `-mode=print_if_changed`, reads the JSON files named
by `tables` and `add_tables` into `custom_tables` and `extra_tables`, and
works out the final list of lint warnings in `lint_warnings`.

`to_json()` (also `str(config)`) renders the persistent settings as
indented JSON, leaving out empty values; `load_reader` reads the same form
from a stream.

## Validation rules

The individual checks are available on their own in `buildkit.validation`
and raise `ConfigError` (a `ValueError`) with a message describing the
problem:

```python
from buildkit.validation import ConfigError, validate_modes, validate_warnings

validate_modes("", "", True)         # ('diff', 'off')

default = ["load", "print", "no-effect"]
everything = default + ["native-cc"]

validate_warnings("+native-cc,-print", everything, default)
# ['load', 'no-effect', 'native-cc']

try:
    validate_warnings("native-cc,-print", everything, default)
except ConfigError as err:
    print(err)
```

A warnings value is `default` (or empty), `all`, an explicit
comma-separated list, or a list of `+name` / `-name` modifiers applied to
the default set; explicit names and modifiers cannot be mixed. The other
checks are `validate_input_type` and `validate_format`.

## Finding Starlark files

```python
from buildkit.files import is_starlark_file, expand_directories

is_starlark_file("BUILD.bazel")    # True
is_starlark_file("build.gradle")   # False

for name in expand_directories(["src", "WORKSPACE"]):
    print(name)
```

Directories are walked recursively in lexical order, skipping `.git`;
plain file arguments are passed through unchanged. A path that does not
exist raises `OSError`.

## Diagnostics

`buildkit.diagnostics` collects results per file and renders them either
as `file:line: category: message (url)` lines, with `# reformat` lines for
files that need formatting, or as JSON (indented when `verbose` is true):

```python
from buildkit.diagnostics import (
    Finding, Position, new_diagnostics, new_file_diagnostics, invalid_file_diagnostics,
)

finding = Finding(Position(3, 1), Position(3, 8), "print", "print() is used")
report = new_diagnostics(
    new_file_diagnostics("pkg/BUILD", [finding]),
    invalid_file_diagnostics(""),     # reported as <stdin>
)
print(report.format("text", False))
print(report.format("json", False))
print(report.to_dict()["success"])   # False
```

## Temporary files and diffs

`buildkit.tempfiles.TempFiles` writes data to temporary files with
`write_temp` and removes them all on `clean()` or when the `with` block
ends.

`buildkit.differ.find()` chooses a diff program from the environment
(`BUILDIFIER_DIFF`, `BUILDIFIER_MULTIDIFF`, `DISPLAY`) and returns it with
a flag telling whether a deprecated environment-based choice was made.
Without settings it uses `diff --unified` (`FC` on Windows), or `tkdiff`
when standard output is a terminal and a display is set. A `Differ` shows
a pair of files at once with `show`, or, for programs that accept several
pairs, queues them until `run()` is called. A diff command of `:` runs
nothing; a program that cannot be started or exits with a non-zero status
raises `DiffError`.
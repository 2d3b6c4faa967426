"""Formatter configuration: defaults, JSON config files and command-line flags."""

from __future__ import annotations

import json
import os
import stat
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import IO, Any

from .validation import (
    ConfigError,
    validate_format,
    validate_input_type,
    validate_modes,
    validate_warnings,
)

CONFIG_FILENAME = ".buildifier.json"

ALL_WARNINGS: tuple[str, ...] = (
    "attr-applicable_licenses",
    "attr-cfg",
    "attr-license",
    "attr-licenses",
    "attr-non-empty",
    "attr-output-default",
    "attr-single-file",
    "build-args-kwargs",
    "bzl-visibility",
    "confusing-name",
    "constant-glob",
    "ctx-actions",
    "ctx-args",
    "deprecated-function",
    "depset-items",
    "depset-iteration",
    "depset-union",
    "dict-concatenation",
    "dict-method-named-arg",
    "duplicated-name",
    "filetype",
    "function-docstring",
    "function-docstring-args",
    "function-docstring-header",
    "function-docstring-return",
    "git-repository",
    "http-archive",
    "integer-division",
    "keyword-positional-params",
    "list-append",
    "load",
    "load-on-top",
    "module-docstring",
    "name-conventions",
    "native-android",
    "native-build",
    "native-cc",
    "native-java",
    "native-package",
    "native-proto",
    "native-py",
    "no-effect",
    "out-of-order-load",
    "output-group",
    "overly-nested-depset",
    "package-name",
    "package-on-top",
    "positional-args",
    "print",
    "provider-params",
    "redefined-variable",
    "repository-name",
    "return-value",
    "rule-impl-return",
    "same-origin-load",
    "skylark-comment",
    "skylark-docstring",
    "string-iteration",
    "uninitialized",
    "unnamed-macro",
    "unreachable",
    "unsorted-dict-items",
    "unused-variable",
)

_NON_DEFAULT_WARNINGS = frozenset(
    {
        "native-android",
        "native-cc",
        "native-java",
        "native-proto",
        "native-py",
        "unsorted-dict-items",
    }
)

DEFAULT_WARNINGS: tuple[str, ...] = tuple(
    w for w in ALL_WARNINGS if w not in _NON_DEFAULT_WARNINGS
)

# JSON key, attribute name, value type; in serialisation order.
_JSON_FIELDS: tuple[tuple[str, str, type], ...] = (
    ("type", "input_type", str),
    ("format", "format", str),
    ("mode", "mode", str),
    ("diffMode", "diff_mode", bool),
    ("lint", "lint", str),
    ("warnings", "warnings", str),
    ("warningsList", "warnings_list", list),
    ("recursive", "recursive", bool),
    ("verbose", "verbose", bool),
    ("diffCommand", "diff_command", str),
    ("multiDiff", "multi_diff", bool),
    ("tables", "tables_path", str),
    ("addTables", "add_tables_path", str),
    ("path", "workspace_relative_path", str),
    ("buildifier_disable", "disable_rewrites", list),
    ("allowsort", "allow_sort", list),
)

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def find_config_path(root_dir: str = "") -> str:
    """Locate the nearest configuration file.

    The BUILDIFIER_CONFIG environment variable wins if set; otherwise the
    search starts at root_dir (or the working directory) and walks up the
    tree. Returns "" when nothing is found.
    """
    from_env = os.environ.get("BUILDIFIER_CONFIG")
    if from_env is not None:
        return from_env
    if not root_dir:
        try:
            root_dir = os.getcwd()
        except OSError:
            return ""
    directory = os.path.abspath(root_dir)
    while True:
        candidate = os.path.join(directory, CONFIG_FILENAME)
        if _is_regular_file(candidate):
            return candidate
        parent = os.path.dirname(directory)
        if parent == directory:
            return ""
        directory = parent


def _is_regular_file(path: str) -> bool:
    try:
        return stat.S_ISREG(os.stat(path).st_mode)
    except OSError:
        return False


def _parse_bool(value: str, name: str) -> bool:
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f'invalid boolean value "{value}" for -{name}: parse error')


def _load_table_definitions(path: str, flag: str) -> Any:
    try:
        with open(path, encoding="utf-8") as handle:
            return json.load(handle)
    except (OSError, ValueError) as exc:
        raise ConfigError(f"failed to parse {path} for -{flag}: {exc}") from exc


@dataclass(frozen=True)
class _Flag:
    name: str
    usage: str
    default: str
    is_bool: bool
    apply: Callable[[str], None] = field(repr=False, compare=False)


class _FlagSet:
    """A command-line flag set bound to the attributes of a target object."""

    def __init__(self, prog: str, target: Any, on_help: Callable[[], None]):
        self.prog = prog
        self._target = target
        self._on_help = on_help
        self._flags: dict[str, _Flag] = {}

    def bool(self, name: str, attr: str, usage: str) -> None:
        default = "true" if getattr(self._target, attr) else "false"

        def apply(value: str) -> None:
            setattr(self._target, attr, _parse_bool(value, name))

        self._flags[name] = _Flag(name, usage, default, True, apply)

    def string(self, name: str, attr: str, usage: str) -> None:
        default = getattr(self._target, attr)

        def apply(value: str) -> None:
            setattr(self._target, attr, value)

        self._flags[name] = _Flag(name, usage, default, False, apply)

    def array(self, name: str, attr: str, usage: str) -> None:
        default = ",".join(getattr(self._target, attr))

        def apply(value: str) -> None:
            getattr(self._target, attr).append(value)

        self._flags[name] = _Flag(name, usage, default, False, apply)

    def visit_all(self) -> list[_Flag]:
        """Return all flags sorted by name."""
        return sorted(self._flags.values(), key=lambda f: f.name)

    def parse(self, argv: Iterable[str]) -> list[str]:
        """Apply flags from argv; return the remaining positional arguments."""
        args = deque(argv)
        while args:
            arg = args[0]
            if len(arg) < 2 or arg[0] != "-":
                break
            args.popleft()
            dashes = 2 if arg[1] == "-" else 1
            if dashes == 2 and len(arg) == 2:
                break
            name = arg[dashes:]
            if not name or name[0] in "-=":
                raise ConfigError(f"bad flag syntax: {arg}")
            name, has_value, value = name.partition("=")
            flag = self._flags.get(name)
            if flag is None:
                if name in ("help", "h"):
                    self._on_help()
                    continue
                raise ConfigError(f"flag provided but not defined: -{name}")
            if flag.is_bool:
                flag.apply(value if has_value else "true")
                continue
            if not has_value:
                if not args:
                    raise ConfigError(f"flag needs an argument: -{name}")
                value = args.popleft()
            flag.apply(value)
        return list(args)


@dataclass
class Config:
    """Formatter configuration, built from defaults, a JSON file and flags."""

    input_type: str = "auto"
    format: str = ""
    mode: str = ""
    diff_mode: bool = False
    lint: str = ""
    warnings: str = ""
    warnings_list: list[str] = field(default_factory=list)
    recursive: bool = False
    verbose: bool = False
    diff_command: str = ""
    multi_diff: bool = False
    tables_path: str = ""
    add_tables_path: str = ""
    workspace_relative_path: str = ""
    disable_rewrites: list[str] = field(default_factory=list)
    allow_sort: list[str] = field(default_factory=list)

    help: bool = False
    version: bool = False
    config_path: str = ""
    lint_warnings: list[str] = field(default_factory=list)
    custom_tables: Any = field(default=None, repr=False)
    extra_tables: Any = field(default=None, repr=False)

    def load_file(self) -> None:
        """Load JSON settings from the file named by config_path."""
        try:
            with open(self.config_path, "rb") as handle:
                self.load_reader(handle)
        except OSError as exc:
            raise ConfigError(str(exc)) from exc

    def load_reader(self, stream: IO[Any]) -> None:
        """Load JSON settings from a readable stream."""
        try:
            data = json.loads(stream.read())
        except ValueError as exc:
            raise ConfigError(f"reading config: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError("config must be a JSON object")

        exact = {key: (attr, kind) for key, attr, kind in _JSON_FIELDS}
        folded = {key.lower(): (attr, kind) for key, attr, kind in _JSON_FIELDS}
        for key, value in data.items():
            target = exact.get(key) or folded.get(key.lower())
            if target is None or value is None:
                continue
            attr, kind = target
            if kind is list:
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    raise ConfigError(f"config field {key!r}: expected a list of strings")
                setattr(self, attr, list(value))
            elif not isinstance(value, kind):
                raise ConfigError(f"config field {key!r}: expected {kind.__name__}")
            else:
                setattr(self, attr, value)

    def make_parser(self, prog: str = "buildifier") -> _FlagSet:
        """Build a flag set that overrides this configuration.

        Current values serve as flag defaults; help, version and config_path
        are reset.
        """
        self.help = False
        self.version = False
        self.config_path = ""

        def request_help() -> None:
            self.help = True

        flags = _FlagSet(prog, self, request_help)
        flags.bool("help", "help", "print usage information")
        flags.bool("version", "version", "print the version of buildifier")
        flags.bool("v", "verbose", "print verbose information to standard error")
        flags.bool("d", "diff_mode", "alias for -mode=diff")
        flags.bool("r", "recursive", "find starlark files recursively")
        flags.bool(
            "multi_diff",
            "multi_diff",
            "the command specified by the -diff_command flag can diff multiple files "
            "in the style of tkdiff (default false)",
        )
        flags.string("mode", "mode", "formatting mode: check, diff, or fix (default fix)")
        flags.string("format", "format", "diagnostics format: text or json (default text)")
        flags.string(
            "diff_command",
            "diff_command",
            "command to run when the formatting mode is diff (default uses the "
            "BUILDIFIER_DIFF, BUILDIFIER_MULTIDIFF, and DISPLAY environment variables "
            "to create the diff command)",
        )
        flags.string("lint", "lint", "lint mode: off, warn, or fix (default off)")
        flags.string(
            "warnings", "warnings", 'comma-separated warnings used in the lint mode or "all"'
        )
        flags.string(
            "path",
            "workspace_relative_path",
            "assume BUILD file has this path relative to the workspace directory",
        )
        flags.string(
            "tables",
            "tables_path",
            "path to JSON file with custom table definitions which will replace "
            "the built-in tables",
        )
        flags.string(
            "add_tables",
            "add_tables_path",
            "path to JSON file with custom table definitions which will be merged "
            "with the built-in tables",
        )
        flags.string(
            "type",
            "input_type",
            "Input file type: build (for BUILD files), bzl (for .bzl files), workspace "
            "(for WORKSPACE files), module (for MODULE.bazel files), default (for "
            "generic Starlark files) or auto (default, based on the filename)",
        )
        flags.string("config", "config_path", "path to .buildifier.json config file")
        flags.array("allowsort", "allow_sort", "additional sort contexts to treat as safe")
        flags.array("buildifier_disable", "disable_rewrites", "list of buildifier rewrites to disable")
        return flags

    def parse_args(self, argv: Iterable[str]) -> list[str]:
        """Apply command-line flags; return the remaining file arguments."""
        return self.make_parser("buildifier").parse(argv)

    def validate(self, args: list[str]) -> None:
        """Check the settings and compute lint_warnings.

        Table definition files named by the config are loaded here.
        """
        validate_input_type(self.input_type)
        validate_format(self.format, self.mode)
        self.mode, self.lint = validate_modes(self.mode, self.lint, self.diff_mode)

        if (self.workspace_relative_path or self.mode == "print_if_changed") and len(args) > 1:
            raise ConfigError(
                "can only format one file when using -path flag or -mode=print_if_changed"
            )

        if self.tables_path:
            self.custom_tables = _load_table_definitions(self.tables_path, "tables")
        if self.add_tables_path:
            self.extra_tables = _load_table_definitions(self.add_tables_path, "add_tables")

        warnings_list = list(self.warnings_list)
        if self.warnings:
            warnings_list.append(self.warnings)
        self.lint_warnings = validate_warnings(
            ",".join(warnings_list), ALL_WARNINGS, DEFAULT_WARNINGS
        )

    def to_json(self) -> str:
        """Render the persistent settings as indented JSON, omitting empty ones."""
        data: dict[str, Any] = {}
        for key, attr, kind in _JSON_FIELDS:
            value = getattr(self, attr)
            if value:
                data[key] = list(value) if kind is list else value
        return json.dumps(data, indent=2, ensure_ascii=False)

    def __str__(self) -> str:
        return self.to_json()


def example() -> Config:
    """Return a sample configuration with every warning enabled."""
    return Config(
        input_type="auto",
        mode="fix",
        lint="fix",
        warnings_list=list(ALL_WARNINGS),
    )
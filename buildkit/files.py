"""Recognising Starlark files and expanding directory arguments."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator

_STARLARK_EXTENSIONS = frozenset({".bzl", ".sky", ".star"})
_PREFIXED_EXTENSIONS = frozenset({".bazel", ".oss"})
_PREFIXES = ("BUILD.", "WORKSPACE.", "MODULE.")


def _extension(name: str) -> str:
    """Return the suffix from the last dot of the final path element, or ""."""
    dot = name.rfind(".")
    separator = max(name.rfind("/"), name.rfind(os.sep))
    return name[dot:] if dot > separator else ""


def is_starlark_file(name: str) -> bool:
    """Report whether a base file name denotes a Starlark file."""
    ext = _extension(name)
    if ext in _STARLARK_EXTENSIONS:
        return True
    if ext in _PREFIXED_EXTENSIONS:
        return name.startswith(_PREFIXES)
    return name in ("BUILD", "WORKSPACE")


def _base_name(path: str) -> str:
    stripped = path.rstrip("/" + os.sep)
    return os.path.basename(stripped) if stripped else path


def _walk(path: str) -> Iterator[str]:
    info = os.lstat(path)
    is_dir = os.path.stat.S_ISDIR(info.st_mode)
    name = _base_name(path)
    if is_dir and name == ".git":
        return
    if not is_dir:
        if is_starlark_file(name):
            yield path
        return
    for entry in sorted(os.listdir(path)):
        yield from _walk(os.path.normpath(os.path.join(path, entry)))


def expand_directories(args: Iterable[str]) -> list[str]:
    """Expand directories into the Starlark files they contain, recursively.

    Plain file arguments are kept as given; ".git" directories are skipped
    and entries are visited in lexical order. Raises OSError for paths that
    cannot be read.
    """
    files: list[str] = []
    for arg in args:
        if not os.path.isdir(arg):
            os.stat(arg)
            files.append(arg)
            continue
        files.extend(_walk(arg))
    return files
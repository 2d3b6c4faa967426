"""Choosing and running the program that shows formatting diffs."""

from __future__ import annotations

import os
import stat
import subprocess
import sys
from dataclasses import dataclass, field


class DiffError(RuntimeError):
    """Raised when the diff program cannot be started or exits with failure."""


def isatty(fd: int) -> bool:
    """Report whether fd is a character device; always False on Windows."""
    if sys.platform == "win32":
        return False
    try:
        return stat.S_ISCHR(os.fstat(fd).st_mode)
    except OSError:
        return False


@dataclass
class Differ:
    """How to invoke diff, and the file pairs queued for a multi-pair diff."""

    cmd: str = ""
    multi_diff: bool = False
    args: list[str] = field(default_factory=list)

    def _run(self, command: str, *args: str) -> None:
        # ":" means do not run anything.
        if self.cmd == ":":
            return
        if command == "FC":
            argv = [command, "/T", *args]
        else:
            # Arguments go through "$@" so they are never shell-interpreted.
            argv = ["/usr/bin/env", "bash", "-c", command + ' "$@"', "--", *args]
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            process = subprocess.Popen(argv)
        except OSError as exc:
            raise DiffError(f"buildifier: {command}: {exc}") from exc
        code = process.wait()
        if code > 0:
            raise DiffError(f"exit status {code}")
        if code < 0:
            raise DiffError(f"signal: {-code}")

    def show(self, old: str, new: str) -> None:
        """Diff old and new now, or queue the pair for a multi-pair program."""
        if not self.multi_diff:
            self._run(self.cmd, old, new)
            return
        self.args.extend([":", old, new])

    def run(self) -> None:
        """Run the queued diffs of a multi-pair program; otherwise do nothing."""
        if not self.multi_diff or not self.args:
            return
        self._run(self.cmd, *self.args)


def find() -> tuple[Differ, bool]:
    """Choose a differ from the environment.

    Returns the differ and whether a deprecated environment-based selection
    was used.
    """
    differ = Differ()
    deprecation_warning = False
    env_cmd = os.environ.get("BUILDIFIER_DIFF", "")
    if env_cmd:
        deprecation_warning = True
        differ.cmd = env_cmd

    know_multi_diff = False
    md = os.environ.get("BUILDIFIER_MULTIDIFF", "")
    if md in ("0", "1"):
        deprecation_warning = True
        differ.multi_diff = md == "1"
        know_multi_diff = True

    has_display = os.environ.get("DISPLAY", "") != ""
    if differ.cmd:
        if not know_multi_diff:
            differ.multi_diff = "tkdiff" in differ.cmd.lower() and isatty(1) and has_display
    else:
        if not know_multi_diff:
            differ.multi_diff = isatty(1) and has_display
            if differ.multi_diff:
                deprecation_warning = True
        if differ.multi_diff:
            differ.cmd = "tkdiff"
        elif sys.platform == "win32":
            deprecation_warning = True
            differ.cmd = "FC"
        else:
            differ.cmd = "diff --unified"
    return differ, deprecation_warning
"""Diagnostics reported by the formatter and linter, as text or JSON."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

# Characters escaped in JSON output so it can be embedded in HTML safely.
_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass(frozen=True)
class Position:
    """A line and column in a source file."""

    line: int = 0
    column: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "column": self.column}


@dataclass(frozen=True)
class Finding:
    """A lint finding as produced by the linter."""

    start: Position
    end: Position
    category: str
    message: str
    url: str = ""
    actionable: bool = True
    auto_fixable: bool = False


@dataclass(frozen=True)
class Warning:
    """A warning as reported in the diagnostics of a file."""

    start: Position
    end: Position
    category: str
    actionable: bool
    auto_fixable: bool
    message: str
    url: str

    @classmethod
    def from_finding(cls, finding: Finding) -> Warning:
        return cls(
            start=Position(finding.start.line, finding.start.column),
            end=Position(finding.end.line, finding.end.column),
            category=finding.category,
            actionable=finding.actionable,
            auto_fixable=finding.auto_fixable,
            message=finding.message,
            url=finding.url,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "category": self.category,
            "actionable": self.actionable,
            "autoFixable": self.auto_fixable,
            "message": self.message,
            "url": self.url,
        }


@dataclass
class FileDiagnostics:
    """Diagnostics for a single file."""

    filename: str
    formatted: bool = True
    valid: bool = True
    warnings: list[Warning] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "formatted": self.formatted,
            "valid": self.valid,
            "warnings": [w.to_dict() for w in self.warnings],
        }


@dataclass
class Diagnostics:
    """Diagnostics for a whole run: overall success and per-file details."""

    success: bool = True
    files: list[FileDiagnostics] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "files": [f.to_dict() for f in self.files]}

    def format(self, format: str, verbose: bool = False) -> str:
        """Render as "text" (or "") or "json"; any other format gives ""."""
        if format in ("text", ""):
            lines = []
            for file in self.files:
                for w in file.warnings:
                    link = f"({w.url})" if w.actionable else f"[{w.url}]"
                    lines.append(
                        f"{file.filename}:{w.start.line}: {w.category}: {w.message} {link}\n"
                    )
                if not file.formatted:
                    lines.append(f"{file.filename} # reformat\n")
            return "".join(lines)
        if format == "json":
            if verbose:
                text = json.dumps(self.to_dict(), indent=4, ensure_ascii=False)
            else:
                text = json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)
            for char, escaped in _JSON_ESCAPES.items():
                text = text.replace(char, escaped)
            return text + "\n"
        return ""


def new_diagnostics(*file_diagnostics: FileDiagnostics) -> Diagnostics:
    """Combine file diagnostics; success only if every file is clean."""
    files = list(file_diagnostics)
    success = all(f.formatted and not f.warnings for f in files)
    return Diagnostics(success=success, files=files)


def new_file_diagnostics(
    filename: str, findings: Iterable[Finding] | None
) -> FileDiagnostics:
    """Build the diagnostics of a valid, formatted file from its findings."""
    return FileDiagnostics(
        filename=filename,
        formatted=True,
        valid=True,
        warnings=[Warning.from_finding(f) for f in findings or ()],
    )


def invalid_file_diagnostics(filename: str) -> FileDiagnostics:
    """Build the diagnostics of a file that could not be parsed."""
    return FileDiagnostics(
        filename=filename or "<stdin>",
        formatted=False,
        valid=False,
        warnings=[],
    )
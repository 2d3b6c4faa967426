"""Configuration, validation, file discovery, diagnostics and diff helpers for formatting Starlark files."""

__version__ = "0.1.0"
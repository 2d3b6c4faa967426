"""Validation of formatter option values."""

from __future__ import annotations

from collections.abc import Iterable

VALID_INPUT_TYPES = ("build", "bzl", "workspace", "default", "module", "auto")
_BASE_MODES = ("check", "diff", "fix", "print_if_changed")


class ConfigError(ValueError):
    """Raised when a configuration value is invalid."""


def validate_input_type(input_type: str) -> None:
    """Check the value of --type."""
    if input_type not in VALID_INPUT_TYPES:
        raise ConfigError(
            f"unrecognized input type {input_type}; "
            "valid types are build, bzl, workspace, default, module, auto"
        )


def validate_format(format: str, mode: str) -> None:
    """Check the value of --format against the formatting mode."""
    if format == "":
        return
    if format in ("text", "json"):
        if mode != "check":
            raise ConfigError("cannot specify --format without --mode=check")
        return
    raise ConfigError(f"unrecognized format {format}; valid types are text, json")


def validate_modes(mode: str, lint: str, dflag: bool, *additional_modes: str) -> tuple[str, str]:
    """Check --mode, --lint and -d; return the resolved (mode, lint) pair."""
    if dflag:
        if mode:
            raise ConfigError("cannot specify both -d and -mode flags")
        mode = "diff"

    valid_modes = [*_BASE_MODES, *additional_modes]
    if not mode:
        mode = "fix"
    elif mode not in valid_modes:
        raise ConfigError(
            f"unrecognized mode {mode}; valid modes are {', '.join(valid_modes)}"
        )

    if lint == "":
        lint = "off"
    elif lint in ("off", "warn"):
        pass
    elif lint == "fix":
        if mode != "fix":
            raise ConfigError("--lint=fix is only compatible with --mode=fix")
    else:
        raise ConfigError(f"unrecognized lint mode {lint}; valid modes are warn and fix")

    return mode, lint


def validate_warnings(
    warnings: str, all_warnings: Iterable[str], default_warnings: Iterable[str]
) -> list[str]:
    """Resolve the --warnings value into the list of warning categories.

    Either every category carries a "+" or "-" modifier, meaning the default
    set plus or minus some categories, or none of them does.
    """
    if warnings in ("", "default"):
        return list(default_warnings)
    if warnings == "all":
        return list(all_warnings)

    plus: dict[str, None] = {}
    minus: set[str] = set()
    raw: list[str] = []
    for warning in warnings.split(","):
        if warning.startswith("+"):
            plus[warning[1:]] = None
        elif warning.startswith("-"):
            minus.add(warning[1:])
        else:
            raw.append(warning)

    if raw and (plus or minus):
        raise ConfigError(
            'warning categories with modifiers ("+" or "-") '
            "can't be mixed with raw warning categories"
        )
    if raw:
        return raw
    return [w for w in default_warnings if w not in minus] + list(plus)
"""Sanitization of stored avatar options into an ``AvatarConfig``.

Option names and defaults match the settings stored by the letter avatar
settings page. Every option has a kind; each kind maps to one
validate-and-default function in ``VALIDATORS``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from letteravatar.backend.colors import is_hex_color
from letteravatar.backend.models import DEFAULT_FIXED_COLOR, DEFAULT_SIZE, METHODS, AvatarConfig

ACTIVE_VALUE = "leira_letter_avatar"
BUILTIN_AVATARS = (
    "mystery",
    "blank",
    "gravatar_default",
    "identicon",
    "wavatar",
    "monsterid",
    "retro",
)
TRUE_STRINGS = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class OptionSpec:
    name: str
    kind: str
    default: Any
    choices: tuple[Any, ...] = ()


OPTION_SPECS: tuple[OptionSpec, ...] = (
    OptionSpec("avatar_default", "avatar_default", "mystery", (ACTIVE_VALUE, *BUILTIN_AVATARS)),
    OptionSpec("leira_letter_avatar_rounded", "boolean", True),
    OptionSpec("leira_letter_avatar_letters", "integer", 2, (1, 2)),
    OptionSpec("leira_letter_avatar_bold", "boolean", False),
    OptionSpec("leira_letter_avatar_uppercase", "boolean", True),
    OptionSpec("leira_letter_avatar_method", "enum", "auto", METHODS),
    OptionSpec("leira_letter_avatar_bg", "color", DEFAULT_FIXED_COLOR),
    OptionSpec("leira_letter_avatar_bgs", "color_list", ""),
)


def _validate_boolean(value: Any, spec: OptionSpec) -> bool:
    if value is None:
        return spec.default
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return bool(value)


def _validate_integer(value: Any, spec: OptionSpec) -> int:
    if isinstance(value, bool):
        return spec.default
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and value.strip().isdecimal():
        try:
            number = int(value.strip())
        except (ValueError, OverflowError):
            return spec.default
    else:
        return spec.default
    if spec.choices and number not in spec.choices:
        return spec.default
    return number


def _validate_enum(value: Any, spec: OptionSpec) -> str:
    candidate = str(value).strip().lower() if value is not None else ""
    return candidate if candidate in spec.choices else spec.default


def _validate_avatar_default(value: Any, spec: OptionSpec) -> str:
    candidate = str(value).strip() if value is not None else ""
    return candidate if candidate in spec.choices else spec.default


def _clean_color(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    candidate = value.strip().lstrip("#").lower()
    return candidate if is_hex_color(candidate) else None


def _validate_color(value: Any, spec: OptionSpec) -> str:
    return _clean_color(value) or spec.default


def _validate_color_list(value: Any, spec: OptionSpec) -> str:
    if isinstance(value, str):
        entries = value.split(",")
    elif isinstance(value, (list, tuple)):
        entries = list(value)
    else:
        return spec.default
    colors = [color for color in (_clean_color(entry) for entry in entries) if color]
    return ",".join(colors)


VALIDATORS: dict[str, Callable[[Any, OptionSpec], Any]] = {
    "boolean": _validate_boolean,
    "integer": _validate_integer,
    "enum": _validate_enum,
    "avatar_default": _validate_avatar_default,
    "color": _validate_color,
    "color_list": _validate_color_list,
}


def default_options() -> dict[str, Any]:
    return {spec.name: spec.default for spec in OPTION_SPECS}


def sanitize_options(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Return every known option, validated, with defaults for missing or invalid values."""
    cleaned: dict[str, Any] = {}
    for spec in OPTION_SPECS:
        if spec.name not in raw:
            cleaned[spec.name] = spec.default
            continue
        cleaned[spec.name] = VALIDATORS[spec.kind](raw[spec.name], spec)
    return cleaned


def config_from_options(
    raw: Mapping[str, Any],
    size: int = DEFAULT_SIZE,
    image_format: str = "svg",
) -> AvatarConfig:
    options = sanitize_options(raw)
    palette = tuple(color for color in options["leira_letter_avatar_bgs"].split(",") if color)
    return AvatarConfig(
        active=options["avatar_default"] == ACTIVE_VALUE,
        rounded=options["leira_letter_avatar_rounded"],
        letters_count=options["leira_letter_avatar_letters"],
        bold=options["leira_letter_avatar_bold"],
        uppercase=options["leira_letter_avatar_uppercase"],
        method=options["leira_letter_avatar_method"],
        fixed_color=options["leira_letter_avatar_bg"],
        color_palette=palette,
        size=size,
        image_format=image_format,
    )

"""Background color selection for letter avatars."""

from __future__ import annotations

import colorsys
import string

from letteravatar.backend.errors import ConfigError
from letteravatar.backend.hashing import stable_hash
from letteravatar.backend.identity import identity_key
from letteravatar.backend.models import AvatarConfig, Color, UserIdentity

AUTO_SATURATION = 0.55
AUTO_LIGHTNESS = 0.55
HUE_STEPS = 360


def is_hex_color(value: object) -> bool:
    return isinstance(value, str) and len(value) == 6 and all(char in string.hexdigits for char in value)


def parse_hex(value: str) -> Color:
    """Parse a 6 character hex color such as ``fc91ad``."""
    if not is_hex_color(value):
        raise ConfigError(f"invalid hex color {value!r}, expected 6 hexadecimal characters")
    return Color(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def color_from_hue(hue: int) -> Color:
    red, green, blue = colorsys.hls_to_rgb(hue / HUE_STEPS, AUTO_LIGHTNESS, AUTO_SATURATION)
    return Color(round(red * 255), round(green * 255), round(blue * 255))


def assign_background(identity: UserIdentity, config: AvatarConfig) -> Color:
    """Pick the background color according to ``config.method``."""
    method = config.method
    if method == "fixed":
        return parse_hex(config.fixed_color)
    if method == "random":
        return _from_palette(identity=identity, palette=config.color_palette)
    if method == "auto":
        return color_from_hue(stable_hash(identity_key(identity)) % HUE_STEPS)
    raise ConfigError(f"unknown color method {method!r}")


def _from_palette(identity: UserIdentity, palette: tuple[str, ...]) -> Color:
    if not palette:
        raise ConfigError("color_palette must not be empty when method is 'random'")
    colors = [parse_hex(entry) for entry in palette]
    return colors[stable_hash(identity_key(identity)) % len(colors)]

"""Letter color selection against a background."""

from __future__ import annotations

from letteravatar.backend.models import BLACK, WHITE, Color

BRIGHTNESS_THRESHOLD = 128


def brightness(color: Color) -> float:
    """Perceived brightness in the YIQ color space, 0 to 255."""
    return (color.red * 299 + color.green * 587 + color.blue * 114) / 1000


def foreground_for(background: Color) -> Color:
    return BLACK if brightness(background) >= BRIGHTNESS_THRESHOLD else WHITE

"""Image synthesis for resolved avatars (SVG and PNG)."""

from __future__ import annotations

import io
from xml.sax.saxutils import escape

from PIL import Image, ImageDraw, ImageFont

from letteravatar.backend.errors import RenderError
from letteravatar.backend.models import DEFAULT_SIZE, IMAGE_FORMATS, SHAPES, Color

MEDIA_TYPES = {
    "svg": "image/svg+xml",
    "png": "image/png",
}

FONT_FAMILY = "Helvetica, Arial, sans-serif"
# Font size relative to the canvas edge, keyed by the number of letters.
FONT_SCALE = {1: 0.5, 2: 0.42}
SUPERSAMPLE = 4


def media_type_for(image_format: str) -> str:
    try:
        return MEDIA_TYPES[image_format]
    except KeyError:
        raise RenderError(f"unsupported image format {image_format!r}") from None


def render(
    letters: str,
    background: Color,
    foreground: Color,
    shape: str,
    bold: bool,
    size: int = DEFAULT_SIZE,
    image_format: str = "svg",
) -> bytes:
    """Draw ``letters`` centered on a filled shape and encode the result.

    Identical arguments always produce byte-identical output.
    """
    _check_inputs(letters=letters, shape=shape, size=size, image_format=image_format)
    if image_format == "png":
        return _render_png(letters, background, foreground, shape, bold, size)
    return _render_svg(letters, background, foreground, shape, bold, size)


def _check_inputs(letters: str, shape: str, size: int, image_format: str) -> None:
    if not isinstance(letters, str) or not 1 <= len(letters) <= 2:
        raise RenderError(f"expected one or two letters, got {letters!r}")
    if not letters.isprintable() or any(char.isspace() for char in letters):
        raise RenderError(f"letters {letters!r} contain characters that cannot be drawn")
    if shape not in SHAPES:
        raise RenderError(f"unsupported shape {shape!r}")
    if image_format not in IMAGE_FORMATS:
        raise RenderError(f"unsupported image format {image_format!r}")
    if not isinstance(size, int) or size <= 0:
        raise RenderError(f"size must be a positive integer, got {size!r}")


def _font_size(letters: str, size: int) -> int:
    return max(1, round(size * FONT_SCALE[len(letters)]))


def _render_svg(letters: str, background: Color, foreground: Color, shape: str, bold: bool, size: int) -> bytes:
    half = size / 2
    if shape == "circle":
        backdrop = f'<circle cx="{half:g}" cy="{half:g}" r="{half:g}" fill="{background.css()}"/>'
    else:
        backdrop = f'<rect width="{size}" height="{size}" fill="{background.css()}"/>'

    weight = "bold" if bold else "normal"
    text = (
        f'<text x="50%" y="50%" dy=".35em" text-anchor="middle" '
        f'font-family="{FONT_FAMILY}" font-size="{_font_size(letters, size)}" '
        f'font-weight="{weight}" fill="{foreground.css()}">{escape(letters)}</text>'
    )
    svg_parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" viewBox="0 0 {size} {size}">',
        backdrop,
        text,
        "</svg>",
    ]
    return "".join(svg_parts).encode("utf-8")


def _render_png(letters: str, background: Color, foreground: Color, shape: str, bold: bool, size: int) -> bytes:
    canvas_size = size * SUPERSAMPLE
    fill = (background.red, background.green, background.blue, 255)
    ink = (foreground.red, foreground.green, foreground.blue, 255)
    try:
        img = Image.new("RGBA", (canvas_size, canvas_size), (0, 0, 0, 0))
        draw = ImageDraw.Draw(img)
        if shape == "circle":
            draw.ellipse((0, 0, canvas_size - 1, canvas_size - 1), fill=fill)
        else:
            draw.rectangle((0, 0, canvas_size, canvas_size), fill=fill)

        font = ImageFont.load_default(size=_font_size(letters, canvas_size))
        stroke = max(1, canvas_size // 48) if bold else 0
        draw.text(
            (canvas_size / 2, canvas_size / 2),
            letters,
            fill=ink,
            font=font,
            anchor="mm",
            stroke_width=stroke,
            stroke_fill=ink,
        )
        img = img.resize((size, size), Image.Resampling.LANCZOS)

        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
    except (OSError, ValueError) as exc:
        raise RenderError(f"could not draw letters {letters!r}: {exc}") from exc
    return buffer.getvalue()

"""Domain models for identities, configuration and resolved avatars."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Method = Literal["auto", "fixed", "random"]
Shape = Literal["circle", "square"]
ImageFormat = Literal["svg", "png"]

METHODS: tuple[str, ...] = ("auto", "fixed", "random")
SHAPES: tuple[str, ...] = ("circle", "square")
IMAGE_FORMATS: tuple[str, ...] = ("svg", "png")

DEFAULT_SIZE = 96
DEFAULT_FIXED_COLOR = "fc91ad"


@dataclass(frozen=True)
class UserIdentity:
    first_name: str | None = None
    last_name: str | None = None
    nickname: str | None = None
    display_name: str | None = None
    username: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class AvatarConfig:
    """Sanitized avatar settings.

    Values are not validated on construction; the component that consumes a
    value raises ``ConfigError`` when it is out of range.
    """

    active: bool = True
    rounded: bool = True
    letters_count: int = 2
    bold: bool = False
    uppercase: bool = True
    method: Method = "auto"
    fixed_color: str = DEFAULT_FIXED_COLOR
    color_palette: tuple[str, ...] = ()
    size: int = DEFAULT_SIZE
    image_format: ImageFormat = "svg"

    @property
    def shape(self) -> Shape:
        return "circle" if self.rounded else "square"


@dataclass(frozen=True)
class Color:
    red: int
    green: int
    blue: int

    @property
    def hex(self) -> str:
        return f"{self.red:02x}{self.green:02x}{self.blue:02x}"

    def css(self) -> str:
        return f"#{self.hex}"


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)


@dataclass(frozen=True)
class ResolvedAvatar:
    letters: str
    background: Color
    foreground: Color
    shape: str


@dataclass(frozen=True)
class RenderedAvatar:
    fingerprint: str
    avatar: ResolvedAvatar
    image: bytes
    media_type: str

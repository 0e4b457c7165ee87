"""Command line renderer for letter avatars."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from letteravatar.backend.config import load_settings
from letteravatar.backend.engine import AvatarService
from letteravatar.backend.errors import AvatarError
from letteravatar.backend.models import DEFAULT_FIXED_COLOR, DEFAULT_SIZE, METHODS, UserIdentity
from letteravatar.backend.options import ACTIVE_VALUE, config_from_options

logger = logging.getLogger("letteravatar.cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a letter avatar")
    parser.add_argument("--first-name", default=None)
    parser.add_argument("--last-name", default=None)
    parser.add_argument("--nickname", default=None)
    parser.add_argument("--display-name", default=None)
    parser.add_argument("--username", default=None)
    parser.add_argument("--email", default=None)
    parser.add_argument("--shape", choices=["circle", "square"], default="circle")
    parser.add_argument("--letters", type=int, choices=[1, 2], default=2)
    parser.add_argument("--bold", action="store_true")
    parser.add_argument("--keep-case", action="store_true", help="Do not upper-case letters")
    parser.add_argument("--method", choices=list(METHODS), default="auto")
    parser.add_argument("--color", default=DEFAULT_FIXED_COLOR, help="Background for --method fixed")
    parser.add_argument("--palette", default="", help="Comma separated colors for --method random")
    parser.add_argument("--size", type=int, default=DEFAULT_SIZE)
    parser.add_argument("--format", choices=["svg", "png"], default="svg")
    parser.add_argument("--output", default="-", help="Output file, '-' for stdout")
    return parser.parse_args(argv)


def build_identity(args: argparse.Namespace) -> UserIdentity:
    return UserIdentity(
        first_name=args.first_name,
        last_name=args.last_name,
        nickname=args.nickname,
        display_name=args.display_name,
        username=args.username,
        email=args.email,
    )


def build_options(args: argparse.Namespace) -> dict[str, object]:
    return {
        "avatar_default": ACTIVE_VALUE,
        "leira_letter_avatar_rounded": args.shape == "circle",
        "leira_letter_avatar_letters": args.letters,
        "leira_letter_avatar_bold": args.bold,
        "leira_letter_avatar_uppercase": not args.keep_case,
        "leira_letter_avatar_method": args.method,
        "leira_letter_avatar_bg": args.color,
        "leira_letter_avatar_bgs": args.palette,
    }


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=load_settings().log_level)

    config = config_from_options(build_options(args), size=args.size, image_format=args.format)
    try:
        rendered = AvatarService().get_avatar(build_identity(args), config)
    except AvatarError as exc:
        print(f"Could not render avatar: {exc}", file=sys.stderr)
        return 1

    if args.output == "-":
        sys.stdout.buffer.write(rendered.image)
        sys.stdout.buffer.flush()
    else:
        Path(args.output).write_bytes(rendered.image)
        logger.info("Wrote %s to %s", rendered.media_type, args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

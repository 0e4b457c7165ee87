"""Avatar resolution pipeline and the service facade around it."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from letteravatar.backend.colors import assign_background
from letteravatar.backend.contrast import foreground_for
from letteravatar.backend.errors import Disabled
from letteravatar.backend.hashing import fingerprint
from letteravatar.backend.identity import resolve_letters
from letteravatar.backend.models import AvatarConfig, RenderedAvatar, ResolvedAvatar, UserIdentity
from letteravatar.backend.render import media_type_for, render
from letteravatar.backend.store import AvatarCache

logger = logging.getLogger(__name__)


def resolve_avatar(identity: UserIdentity, config: AvatarConfig) -> ResolvedAvatar:
    """Compute letters, colors and shape for an identity."""
    letters = resolve_letters(identity, count=config.letters_count, uppercase=config.uppercase)
    background = assign_background(identity, config)
    return ResolvedAvatar(
        letters=letters,
        background=background,
        foreground=foreground_for(background),
        shape=config.shape,
    )


def render_avatar(identity: UserIdentity, config: AvatarConfig) -> RenderedAvatar:
    avatar = resolve_avatar(identity, config)
    image = render(
        letters=avatar.letters,
        background=avatar.background,
        foreground=avatar.foreground,
        shape=avatar.shape,
        bold=config.bold,
        size=config.size,
        image_format=config.image_format,
    )
    return RenderedAvatar(
        fingerprint=fingerprint(identity, config),
        avatar=avatar,
        image=image,
        media_type=media_type_for(config.image_format),
    )


@dataclass
class AvatarService:
    cache: AvatarCache | None = None

    def get_avatar(self, identity: UserIdentity, config: AvatarConfig) -> RenderedAvatar:
        if not config.active:
            raise Disabled("letter avatars are disabled")

        if self.cache is None:
            return self._render(identity, config)

        key = fingerprint(identity, config)
        computed = False

        def compute() -> RenderedAvatar:
            nonlocal computed
            computed = True
            logger.debug("Avatar cache miss for %s", key)
            return self._render(identity, config)

        rendered = self.cache.get_or_compute(key, compute)
        if not computed:
            logger.debug("Avatar cache hit for %s", key)
        return rendered

    def _render(self, identity: UserIdentity, config: AvatarConfig) -> RenderedAvatar:
        rendered = render_avatar(identity, config)
        logger.info(
            "Rendered %s avatar %r (%d bytes)",
            config.image_format,
            rendered.avatar.letters,
            len(rendered.image),
        )
        return rendered

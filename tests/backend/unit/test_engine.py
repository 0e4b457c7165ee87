from dataclasses import replace

import pytest

from letteravatar.backend.engine import AvatarService, render_avatar, resolve_avatar
from letteravatar.backend.errors import ConfigError, Disabled, IdentityError
from letteravatar.backend.models import BLACK, AvatarConfig, Color, RenderedAvatar, UserIdentity
from letteravatar.backend.store import InMemoryAvatarCache

JANE = UserIdentity(first_name="Jane", last_name="Doe", email="jane.doe@example.com")


def test_resolve_avatar_combines_letters_colors_and_shape() -> None:
    config = AvatarConfig(method="fixed", fixed_color="fc91ad", rounded=False)

    avatar = resolve_avatar(JANE, config)

    assert avatar.letters == "JD"
    assert avatar.background == Color(252, 145, 173)
    assert avatar.foreground == BLACK
    assert avatar.shape == "square"


def test_render_avatar_returns_svg_bytes_and_fingerprint() -> None:
    rendered = render_avatar(JANE, AvatarConfig())

    assert rendered.media_type == "image/svg+xml"
    assert rendered.image.startswith(b"<svg")
    assert b">JD</text>" in rendered.image
    assert len(rendered.fingerprint) == 64


def test_get_avatar_rejects_disabled_config() -> None:
    service = AvatarService()

    with pytest.raises(Disabled):
        service.get_avatar(JANE, AvatarConfig(active=False))


def test_get_avatar_propagates_engine_errors() -> None:
    service = AvatarService(cache=InMemoryAvatarCache())

    with pytest.raises(IdentityError):
        service.get_avatar(UserIdentity(), AvatarConfig())
    with pytest.raises(ConfigError):
        service.get_avatar(JANE, AvatarConfig(method="fixed", fixed_color="zzzzzz"))


def test_get_avatar_without_cache_is_deterministic() -> None:
    service = AvatarService()

    first = service.get_avatar(JANE, AvatarConfig())
    second = service.get_avatar(JANE, AvatarConfig())

    assert first == second


def test_get_avatar_returns_cached_bytes_without_rendering(monkeypatch) -> None:
    cache = InMemoryAvatarCache()
    service = AvatarService(cache=cache)
    config = AvatarConfig()

    first = service.get_avatar(JANE, config)

    def fail_render(*args, **kwargs):
        raise AssertionError("cache hit must not render again")

    monkeypatch.setattr("letteravatar.backend.engine.render_avatar", fail_render)
    second = service.get_avatar(JANE, config)

    assert second is first
    assert len(cache) == 1


def test_get_avatar_returns_stored_bytes_unchanged() -> None:
    cache = InMemoryAvatarCache()
    service = AvatarService(cache=cache)
    config = AvatarConfig()
    rendered = render_avatar(JANE, config)
    stored = RenderedAvatar(
        fingerprint=rendered.fingerprint,
        avatar=rendered.avatar,
        image=b"stored-bytes",
        media_type=rendered.media_type,
    )
    cache.put(stored)

    assert service.get_avatar(JANE, config).image == b"stored-bytes"


def test_get_avatar_caches_per_config() -> None:
    cache = InMemoryAvatarCache()
    service = AvatarService(cache=cache)
    config = AvatarConfig()

    svg = service.get_avatar(JANE, config)
    png = service.get_avatar(JANE, replace(config, image_format="png", size=32))

    assert svg.media_type == "image/svg+xml"
    assert png.media_type == "image/png"
    assert len(cache) == 2

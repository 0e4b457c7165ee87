"""Backend package for letter avatar generation."""

from .colors import assign_background, parse_hex
from .config import BackendSettings, load_settings
from .contrast import foreground_for
from .engine import AvatarService, render_avatar, resolve_avatar
from .errors import AvatarError, ConfigError, Disabled, IdentityError, RenderError
from .identity import identity_key, resolve_letters
from .models import AvatarConfig, Color, RenderedAvatar, ResolvedAvatar, UserIdentity
from .options import config_from_options, default_options, sanitize_options
from .render import render
from .store import AvatarCache, InMemoryAvatarCache, PostgresAvatarCache, create_cache

__all__ = [
    "assign_background",
    "AvatarCache",
    "AvatarConfig",
    "AvatarError",
    "AvatarService",
    "BackendSettings",
    "Color",
    "config_from_options",
    "ConfigError",
    "create_cache",
    "default_options",
    "Disabled",
    "foreground_for",
    "identity_key",
    "IdentityError",
    "InMemoryAvatarCache",
    "load_settings",
    "parse_hex",
    "PostgresAvatarCache",
    "render",
    "render_avatar",
    "RenderedAvatar",
    "RenderError",
    "ResolvedAvatar",
    "resolve_avatar",
    "resolve_letters",
    "sanitize_options",
    "UserIdentity",
]

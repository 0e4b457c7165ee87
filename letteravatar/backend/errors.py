"""Error kinds raised by the avatar engine."""

from __future__ import annotations


class AvatarError(Exception):
    """Base class for every error the avatar engine reports to its caller."""


class IdentityError(AvatarError, ValueError):
    """No usable letters or identity key could be derived from the identity."""


class ConfigError(AvatarError, ValueError):
    """Configuration value is missing or out of range."""


class Disabled(AvatarError):
    """Avatar generation was requested while the feature is switched off."""


class RenderError(AvatarError, RuntimeError):
    """Image synthesis failed."""

"""Letter extraction from user identity fields."""

from __future__ import annotations

from typing import Callable

from letteravatar.backend.errors import ConfigError, IdentityError
from letteravatar.backend.models import UserIdentity

LETTER_COUNTS = (1, 2)

Extractor = Callable[[UserIdentity, int], str]


def _alphanumerics(value: str | None, count: int) -> str:
    if not value:
        return ""
    letters = [char for char in value if char.isalnum()]
    return "".join(letters[:count])


def _email_local_part(email: str | None) -> str | None:
    if not email:
        return email
    return email.split("@", maxsplit=1)[0]


def _from_full_name(identity: UserIdentity, count: int) -> str:
    initials = [_alphanumerics(identity.first_name, 1), _alphanumerics(identity.last_name, 1)]
    return "".join(initial for initial in initials if initial)[:count]


def _from_nickname(identity: UserIdentity, count: int) -> str:
    return _alphanumerics(identity.nickname, count)


def _from_display_name(identity: UserIdentity, count: int) -> str:
    return _alphanumerics(identity.display_name, count)


def _from_username(identity: UserIdentity, count: int) -> str:
    return _alphanumerics(identity.username, count)


def _from_email(identity: UserIdentity, count: int) -> str:
    return _alphanumerics(_email_local_part(identity.email), count)


EXTRACTORS: tuple[Extractor, ...] = (
    _from_full_name,
    _from_nickname,
    _from_display_name,
    _from_username,
    _from_email,
)


def _upper(letters: str) -> str:
    # 'ß'.upper() is 'SS'; keep such characters so the letter count is unchanged.
    return "".join(char.upper() if len(char.upper()) == 1 else char for char in letters)


def resolve_letters(identity: UserIdentity, count: int, uppercase: bool) -> str:
    """Return up to ``count`` letters from the first identity source that has any.

    Sources are tried in order: first and last name initials, nickname,
    display name, username, email local part. Sources are never merged.
    """
    if count not in LETTER_COUNTS:
        raise ConfigError(f"letters_count must be 1 or 2, got {count!r}")

    for extractor in EXTRACTORS:
        letters = extractor(identity, count)
        if letters:
            return _upper(letters) if uppercase else letters
    raise IdentityError("identity has no field with a usable character")


def identity_key(identity: UserIdentity) -> str:
    """Return the stable key used to derive per-user colors."""
    full_name = " ".join(part.strip() for part in (identity.first_name, identity.last_name) if part and part.strip())
    candidates = (
        identity.email,
        identity.username,
        identity.display_name,
        identity.nickname,
        full_name,
    )
    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate.strip().lower()
    raise IdentityError("identity has no field usable as a stable key")

"""Cache interfaces and implementations for rendered avatars."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
import logging
import threading
from typing import Any, Callable, Protocol

from letteravatar.backend.colors import parse_hex
from letteravatar.backend.models import RenderedAvatar, ResolvedAvatar

logger = logging.getLogger(__name__)


class AvatarCache(Protocol):
    def get(self, fingerprint: str) -> RenderedAvatar | None:
        """Return the cached avatar for a fingerprint, if any."""

    def put(self, rendered: RenderedAvatar) -> None:
        """Store a rendered avatar under its fingerprint."""

    def get_or_compute(self, fingerprint: str, compute: Callable[[], RenderedAvatar]) -> RenderedAvatar:
        """Return the cached avatar or compute, store and return it."""

    def clear(self) -> None:
        """Drop every cached avatar, e.g. after the configuration changed."""


@dataclass
class InMemoryAvatarCache:
    max_entries: int | None = None

    def __post_init__(self) -> None:
        self._entries: OrderedDict[str, RenderedAvatar] = OrderedDict()
        self._lock = threading.Lock()
        self._key_locks: dict[str, threading.Lock] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, fingerprint: str) -> RenderedAvatar | None:
        with self._lock:
            return self._entries.get(fingerprint)

    def put(self, rendered: RenderedAvatar) -> None:
        with self._lock:
            self._entries[rendered.fingerprint] = rendered
            self._entries.move_to_end(rendered.fingerprint)
            if self.max_entries is not None:
                while len(self._entries) > self.max_entries:
                    evicted, _ = self._entries.popitem(last=False)
                    logger.debug("Evicted avatar %s from cache", evicted)

    def get_or_compute(self, fingerprint: str, compute: Callable[[], RenderedAvatar]) -> RenderedAvatar:
        cached = self.get(fingerprint)
        if cached is not None:
            return cached

        with self._lock:
            key_lock = self._key_locks.setdefault(fingerprint, threading.Lock())

        with key_lock:
            # Another thread may have finished while we waited for the key lock.
            cached = self.get(fingerprint)
            if cached is not None:
                return cached
            try:
                rendered = compute()
                self.put(rendered)
            finally:
                with self._lock:
                    self._key_locks.pop(fingerprint, None)
        return rendered

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


@dataclass
class PostgresAvatarCache:
    database_url: str

    def _connect(self) -> Any:
        import psycopg

        return psycopg.connect(self.database_url)

    def get(self, fingerprint: str) -> RenderedAvatar | None:
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT letters, background, foreground, shape, media_type, image
                    FROM avatar_cache
                    WHERE fingerprint = %s
                    """,
                    (fingerprint,),
                )
                row = cur.fetchone()

        if row is None:
            return None

        letters, background, foreground, shape, media_type, image = row
        avatar = ResolvedAvatar(
            letters=letters,
            background=parse_hex(background),
            foreground=parse_hex(foreground),
            shape=shape,
        )
        return RenderedAvatar(fingerprint=fingerprint, avatar=avatar, image=bytes(image), media_type=media_type)

    def put(self, rendered: RenderedAvatar) -> None:
        avatar = rendered.avatar
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO avatar_cache (fingerprint, letters, background, foreground, shape, media_type, image)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    ON CONFLICT (fingerprint) DO NOTHING
                    """,
                    (
                        rendered.fingerprint,
                        avatar.letters,
                        avatar.background.hex,
                        avatar.foreground.hex,
                        avatar.shape,
                        rendered.media_type,
                        rendered.image,
                    ),
                )
                if cur.rowcount == 0:
                    logger.debug("Avatar %s was already cached by another worker", rendered.fingerprint)
            conn.commit()

    def get_or_compute(self, fingerprint: str, compute: Callable[[], RenderedAvatar]) -> RenderedAvatar:
        cached = self.get(fingerprint)
        if cached is not None:
            return cached
        rendered = compute()
        self.put(rendered)
        return rendered

    def clear(self) -> None:
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM avatar_cache")
            conn.commit()


def create_cache(database_url: str | None, max_entries: int | None = None) -> AvatarCache:
    if database_url:
        return PostgresAvatarCache(database_url=database_url)
    return InMemoryAvatarCache(max_entries=max_entries)

"""Stable hashing helpers for per-user colors and cache fingerprints."""

from __future__ import annotations

from dataclasses import asdict
import hashlib
import json

from letteravatar.backend.models import AvatarConfig, UserIdentity


HASH_BYTES = 8


def stable_hash(key: str) -> int:
    """Map a key to a non-negative integer via sha256, identical on every platform."""
    digest = hashlib.sha256(key.encode("utf-8")).digest()
    return int.from_bytes(digest[:HASH_BYTES], "big")


def fingerprint(identity: UserIdentity, config: AvatarConfig) -> str:
    """Create a cache key covering every identity field and every config field."""
    payload = {
        "identity": asdict(identity),
        "config": asdict(config),
    }
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()

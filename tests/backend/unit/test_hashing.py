from dataclasses import replace

from letteravatar.backend.hashing import fingerprint, stable_hash
from letteravatar.backend.models import AvatarConfig, UserIdentity


def test_stable_hash_is_deterministic_and_known() -> None:
    first = stable_hash("jane.doe@example.com")
    second = stable_hash("jane.doe@example.com")

    assert first == second
    assert 0 <= first < 2**64
    # sha256("") begins with e3b0c44298fc1c14
    assert stable_hash("") == 0xE3B0C44298FC1C14


def test_stable_hash_differs_for_different_keys() -> None:
    assert stable_hash("alice") != stable_hash("bob")


def test_fingerprint_is_hex_digest_and_stable() -> None:
    identity = UserIdentity(username="jane")
    config = AvatarConfig(color_palette=("fc91ad", "37c5ab"))

    first = fingerprint(identity, config)

    assert first == fingerprint(identity, config)
    assert len(first) == 64


def test_fingerprint_changes_with_any_identity_or_config_field() -> None:
    identity = UserIdentity(first_name="Jane", email="jane@example.com")
    config = AvatarConfig()
    baseline = fingerprint(identity, config)

    assert fingerprint(replace(identity, first_name="June"), config) != baseline
    assert fingerprint(identity, replace(config, bold=True)) != baseline
    assert fingerprint(identity, replace(config, color_palette=("ffffff",))) != baseline
    assert fingerprint(identity, replace(config, image_format="png")) != baseline

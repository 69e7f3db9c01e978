from __future__ import annotations

import pytest

from tracker.application.services.password_hashing import WerkzeugPasswordHasher


@pytest.fixture()
def hasher() -> WerkzeugPasswordHasher:
    return WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")


def test_hash_is_not_plaintext_and_verifies(hasher: WerkzeugPasswordHasher) -> None:
    hashed = hasher.hash("secret1")

    assert hashed != "secret1"
    assert hasher.verify("secret1", hashed)
    assert not hasher.verify("secret2", hashed)


def test_equal_passwords_produce_different_hashes(hasher: WerkzeugPasswordHasher) -> None:
    assert hasher.hash("secret1") != hasher.hash("secret1")


@pytest.mark.parametrize("stored", ["", "plaintext", "bogus$salt$value"])
def test_verify_against_malformed_hash_is_false(
    hasher: WerkzeugPasswordHasher, stored: str
) -> None:
    assert hasher.verify("secret1", stored) is False


def test_default_method_is_scrypt() -> None:
    assert WerkzeugPasswordHasher().hash("secret1").startswith("scrypt:")

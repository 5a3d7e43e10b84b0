from __future__ import annotations

import pytest

from authgate.application.services.password_hashing import WerkzeugPasswordHasher
from authgate.shared.errors import HashingError


@pytest.fixture()
def hasher() -> WerkzeugPasswordHasher:
    return WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")


def test_hash_then_verify(hasher: WerkzeugPasswordHasher) -> None:
    digest = hasher.hash("pw1")

    assert "pw1" not in digest
    assert hasher.verify("pw1", digest)
    assert not hasher.verify("pw2", digest)
    assert not hasher.verify("", digest)


def test_hash_is_salted(hasher: WerkzeugPasswordHasher) -> None:
    assert hasher.hash("same") != hasher.hash("same")


def test_default_method_is_scrypt() -> None:
    hasher = WerkzeugPasswordHasher()
    digest = hasher.hash("pw1")

    assert digest.startswith("scrypt:")
    assert hasher.verify("pw1", digest)


@pytest.mark.parametrize(
    "digest",
    ["", "garbage", "pbkdf2:sha256:1000$salt", "nosuchalgo$salt$abcd", "pbkdf2:sha256:x$salt$abcd"],
)
def test_verify_malformed_digest_is_false(hasher: WerkzeugPasswordHasher, digest: str) -> None:
    assert hasher.verify("pw1", digest) is False


def test_unusable_method_raises_hashing_error() -> None:
    hasher = WerkzeugPasswordHasher(method="nosuchalgo")

    with pytest.raises(HashingError) as exc_info:
        hasher.hash("pw1")

    assert exc_info.value.to_dict() == {"error": "hashing_error"}

"""Unit tests for the werkzeug-backed credential hasher."""

from __future__ import annotations

import pytest
from cook_service.infra.security.werkzeug_hasher import WerkzeugCredentialHasher
from cook_service.services._shared.ports import EXTERNAL_MARKER_PREFIX, HashingError


def test_hash_and_verify_round_trip(hasher):
    hashed = hasher.hash_secret("s3cret")

    assert hashed != "s3cret"
    assert hasher.verify_secret("s3cret", hashed)
    assert not hasher.verify_secret("wrong", hashed)


def test_hashes_are_salted(hasher):
    assert hasher.hash_secret("same") != hasher.hash_secret("same")


def test_empty_secret_cannot_be_hashed(hasher):
    with pytest.raises(HashingError):
        hasher.hash_secret("")


def test_unknown_method_raises_hashing_error():
    with pytest.raises(HashingError):
        WerkzeugCredentialHasher(method="no-such-method").hash_secret("s3cret")


def test_external_marker_is_deterministic_and_prefixed(hasher):
    marker = hasher.external_marker("google-123")

    assert marker == hasher.external_marker("google-123")
    assert marker != hasher.external_marker("google-124")
    assert marker.startswith(EXTERNAL_MARKER_PREFIX)
    assert "google-123" not in marker


def test_marker_never_verifies_as_a_password(hasher):
    marker = hasher.external_marker("google-123")

    assert not hasher.verify_secret("google-123", marker)
    assert not hasher.verify_secret(marker, marker)


def test_verify_tolerates_garbage_hashes(hasher):
    assert not hasher.verify_secret("s3cret", "not-a-hash")

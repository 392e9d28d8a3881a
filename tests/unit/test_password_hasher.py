"""Unit tests for credential hashers.

These tests verify both the fake and real credential hasher implementations.
"""

import pytest

from app.infrastructure.security.argon2_credential_hasher import Argon2CredentialHasher
from tests.fakes.password_hasher_fake import FakePasswordHasher

pytestmark = pytest.mark.unit


class TestFakePasswordHasher:
    """Test the fake credential hasher implementation."""

    def test_hash_adds_prefix(self):
        assert FakePasswordHasher().hash("Passw0rd") == "HASHED:Passw0rd"

    def test_verify_correct_and_wrong_password(self):
        hasher = FakePasswordHasher()
        hashed = hasher.hash("Passw0rd")

        assert hasher.verify("Passw0rd", hashed) is True
        assert hasher.verify("Wr0ngPass", hashed) is False

    def test_verify_rejects_non_fake_hash(self):
        assert FakePasswordHasher().verify("Passw0rd", "$argon2id$whatever") is False


class TestArgon2CredentialHasher:
    """Test the real Argon2 implementation (low costs keep the suite fast)."""

    @pytest.fixture
    def hasher(self) -> Argon2CredentialHasher:
        return Argon2CredentialHasher(time_cost=1, memory_cost=1024, parallelism=1)

    def test_hash_is_argon2id_and_hides_plaintext(self, hasher):
        hashed = hasher.hash("Passw0rd")

        assert hashed.startswith("$argon2id$")
        assert "Passw0rd" not in hashed

    def test_verify_round_trip(self, hasher):
        hashed = hasher.hash("Passw0rd")

        assert hasher.verify("Passw0rd", hashed) is True

    def test_verify_different_password_fails(self, hasher):
        hashed = hasher.hash("Passw0rd")

        assert hasher.verify("Passw0rd!", hashed) is False
        assert hasher.verify("passw0rd", hashed) is False

    def test_same_password_hashes_differently(self, hasher):
        assert hasher.hash("Passw0rd") != hasher.hash("Passw0rd")

    @pytest.mark.parametrize("stored", ["", "not-a-hash", "HASHED:Passw0rd", "$argon2id$broken"])
    def test_verify_malformed_stored_form_returns_false(self, hasher, stored):
        assert hasher.verify("Passw0rd", stored) is False

    def test_unicode_password(self, hasher):
        hashed = hasher.hash("Pässw0rd密码")

        assert hasher.verify("Pässw0rd密码", hashed) is True

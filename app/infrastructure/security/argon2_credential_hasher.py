"""Argon2 credential hasher implementation using pwdlib.

The domain (ICredentialHasher) states WHAT is needed: hash and verify. This
module decides HOW: Argon2id via pwdlib, with a fresh random salt per
credential and parameters encoded in the stored form, so cost settings can
be raised later without invalidating existing hashes.
"""

from pwdlib import PasswordHash
from pwdlib.hashers.argon2 import Argon2Hasher

from app.domain.services.credential_hasher import ICredentialHasher


class Argon2CredentialHasher(ICredentialHasher):
    """
    Production credential hasher using Argon2id.

    Defaults follow pwdlib (64 MiB memory, 3 iterations, parallelism 4).
    Lower costs are only appropriate in tests.

    Usage:
        hasher = Argon2CredentialHasher()
        stored = hasher.hash("Passw0rd")
        # "$argon2id$v=19$m=65536,t=3,p=4$<salt>$<hash>"
        hasher.verify("Passw0rd", stored)  # True
    """

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
    ):
        """
        Args:
            time_cost: Number of iterations
            memory_cost: Memory usage in KiB
            parallelism: Number of parallel lanes
        """
        self._password_hash = PasswordHash(
            (
                Argon2Hasher(
                    time_cost=time_cost,
                    memory_cost=memory_cost,
                    parallelism=parallelism,
                ),
            )
        )

    def hash(self, plain_password: str) -> str:
        """
        Hash a plain text password using Argon2id.

        Each call draws a new salt, so hashing the same password twice
        yields two different stored forms.
        """
        return self._password_hash.hash(plain_password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a plain text password against an Argon2 hash.

        Comparison is constant-time inside argon2. Malformed or foreign
        stored forms return False instead of raising.
        """
        try:
            return self._password_hash.verify(plain_password, hashed_password)
        except Exception:
            # Unknown hash format; never leak why verification failed
            return False

"""Credential hashing interface - domain service abstraction.

The domain requires that passwords are never stored in plain text and that a
login attempt can be checked against the stored form. It does not care which
adaptive algorithm or library does the work; that choice lives in the
infrastructure layer (Argon2CredentialHasher).
"""

from abc import ABC, abstractmethod


class ICredentialHasher(ABC):
    """
    Interface for password hashing operations.

    Implementations must use a slow, salted algorithm with a fresh random
    salt per credential, and compare in constant time.
    """

    @abstractmethod
    def hash(self, plain_password: str) -> str:
        """
        Hash a plain text password.

        Args:
            plain_password: The plain text password to hash

        Returns:
            Self-describing stored form (algorithm, parameters, salt, digest)
        """
        pass

    @abstractmethod
    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a plain text password against a stored form.

        Must not raise for malformed stored forms; return False instead.

        Args:
            plain_password: The plain text password to verify
            hashed_password: The previously stored hash

        Returns:
            True if password matches, False otherwise
        """
        pass


"""Opaque token generator interface.

Opaque tokens are single-use bearer secrets mailed to the account owner for
email verification and password reset. Uniqueness is enforced by the account
store at write time, not by the generator.
"""

from abc import ABC, abstractmethod


class IOpaqueTokenGenerator(ABC):
    """Interface for producing unguessable random tokens."""

    @abstractmethod
    def generate(self) -> str:
        """
        Produce a new random token.

        Returns:
            Text-safe token drawn from a cryptographically secure source
        """
        pass

"""Cryptographically secure opaque token generator."""

import secrets

from app.domain.services.opaque_token_generator import IOpaqueTokenGenerator

DEFAULT_TOKEN_BYTES = 32


class SecureOpaqueTokenGenerator(IOpaqueTokenGenerator):
    """Hex-encoded random tokens from the OS CSPRNG (32 bytes → 64 hex chars)."""

    def __init__(self, num_bytes: int = DEFAULT_TOKEN_BYTES):
        if num_bytes < 16:
            raise ValueError("Opaque tokens need at least 16 random bytes")
        self._num_bytes = num_bytes

    def generate(self) -> str:
        return secrets.token_hex(self._num_bytes)

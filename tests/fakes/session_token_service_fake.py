"""Fake session token service with predictable tokens.

Token format: "session_<account_id>_<n>". Tokens can be revoked in tests to
simulate expiry without waiting.
"""

from datetime import datetime, timedelta, timezone

from app.domain.services.session_token_service import ISessionTokenService, SessionClaims


class FakeSessionTokenService(ISessionTokenService):
    """In-memory fake implementation of ISessionTokenService."""

    def __init__(self, expire_days: int = 7):
        self._expire_days = expire_days
        self._tokens: dict[str, SessionClaims] = {}

    @property
    def lifetime_seconds(self) -> int:
        return self._expire_days * 24 * 60 * 60

    def issue(self, account_id: int) -> str:
        token = f"session_{account_id}_{len(self._tokens) + 1}"
        now = datetime.now(timezone.utc)
        self._tokens[token] = SessionClaims(
            account_id=account_id,
            issued_at=now,
            expires_at=now + timedelta(days=self._expire_days),
            token_id=token,
        )
        return token

    def validate(self, token: str | None) -> SessionClaims | None:
        if not token:
            return None
        claims = self._tokens.get(token)
        if claims is None or claims.is_expired:
            return None
        return claims

    # Helper methods for testing

    def revoke(self, token: str) -> None:
        self._tokens.pop(token, None)

    @property
    def issued_tokens(self) -> list[str]:
        return list(self._tokens)

"""JWT session token service implementation using PyJWT.

Session tokens are HMAC-signed JWTs carrying the account id, issue time,
expiry and a unique id. Without the server-held secret a token for an
arbitrary account cannot be fabricated, and any tampering breaks the
signature.

Dependency flow:
    AuthService / SessionGateMiddleware → ISessionTokenService (domain) ← JWTSessionTokenService
"""

import uuid
from datetime import datetime, timedelta, timezone

import jwt

from app.domain.services.session_token_service import ISessionTokenService, SessionClaims

SESSION_TOKEN_TYPE = "session"
_REQUIRED_CLAIMS = ["sub", "iat", "exp", "type"]


class JWTSessionTokenService(ISessionTokenService):
    """
    Production session token service.

    JWT payload:
    - sub: account id (string, per RFC 7519)
    - iat / exp: issued-at and expiry
    - jti: unique token id
    - type: "session", so other JWTs signed with the same key are rejected
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_days: int = 7,
    ):
        """
        Initialize JWT session token service.

        Args:
            secret_key: Secret key for signing tokens (min 32 characters)
            algorithm: JWT signing algorithm (default: HS256)
            expire_days: Session lifetime in days

        Raises:
            ValueError: If secret_key is too short
        """
        if len(secret_key) < 32:
            raise ValueError("Secret key must be at least 32 characters long")

        self._secret_key = secret_key
        self._algorithm = algorithm
        self._lifetime = timedelta(days=expire_days)

    @property
    def lifetime_seconds(self) -> int:
        return int(self._lifetime.total_seconds())

    def issue(self, account_id: int) -> str:
        """Generate a signed session token for an account."""
        now = datetime.now(timezone.utc)

        payload = {
            "sub": str(account_id),
            "iat": now,
            "exp": now + self._lifetime,
            "jti": str(uuid.uuid4()),
            "type": SESSION_TOKEN_TYPE,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def validate(self, token: str | None) -> SessionClaims | None:
        """
        Verify signature, expiry and type of a session token.

        Returns:
            SessionClaims if valid; None for anything else (fails closed)
        """
        if not token or not isinstance(token, str):
            return None

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )

            if payload.get("type") != SESSION_TOKEN_TYPE:
                return None

            return SessionClaims(
                account_id=int(payload["sub"]),
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                token_id=payload.get("jti"),
            )

        except (jwt.PyJWTError, ValueError, TypeError, KeyError):
            # Invalid signature, expired, malformed or non-numeric subject
            return None

"""ASGI middleware that guards protected routes with a session token.

Every HTTP request whose path falls under one of the protected prefixes
must carry ``Authorization: Bearer <token>``. The token is validated
statelessly through ISessionTokenService; on success the account id is
placed in ``scope["state"]["account_id"]`` for handlers to read (see
``get_current_account_id``). Other paths pass through untouched.

This is a raw ASGI middleware (not BaseHTTPMiddleware) so a rejected
request never reaches the router or opens a database session.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from starlette.types import ASGIApp, Receive, Scope, Send

from app.domain.services.session_token_service import ISessionTokenService
from app.presentation.schemas import error_response

logger = logging.getLogger(__name__)

MISSING_HEADER_MESSAGE = "Missing or invalid authorization header"
INVALID_TOKEN_MESSAGE = "Invalid or expired token"

_BEARER_PREFIX = "bearer "


class SessionGateMiddleware:
    """Reject unauthenticated requests to protected path prefixes with 401."""

    def __init__(
        self,
        app: ASGIApp,
        token_service: ISessionTokenService,
        protected_prefixes: Iterable[str],
    ) -> None:
        """Initialize with the next ASGI application.

        Args:
            app: The next ASGI application in the middleware chain.
            token_service: Validates session tokens.
            protected_prefixes: Path prefixes that require a session.
        """
        self.app = app
        self._token_service = token_service
        self._protected_prefixes = tuple(p.rstrip("/") for p in protected_prefixes if p)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not self.is_protected(scope["path"]):
            await self.app(scope, receive, send)
            return

        token = _extract_bearer_token(scope)
        if token is None:
            response = error_response(401, MISSING_HEADER_MESSAGE, "UNAUTHORIZED")
            await response(scope, receive, send)
            return

        claims = self._token_service.validate(token)
        if claims is None:
            logger.info(f"Rejected session token on {scope['path']}")
            response = error_response(401, INVALID_TOKEN_MESSAGE, "UNAUTHORIZED")
            await response(scope, receive, send)
            return

        scope.setdefault("state", {})["account_id"] = claims.account_id
        await self.app(scope, receive, send)

    def is_protected(self, path: str) -> bool:
        """Match whole path segments: /api/user guards /api/user/me, not /api/users."""
        return any(
            path == prefix or path.startswith(prefix + "/")
            for prefix in self._protected_prefixes
        )


def _extract_bearer_token(scope: Scope) -> str | None:
    for header_name, header_value in scope.get("headers", []):
        if header_name.lower() == b"authorization":
            value = header_value.decode("latin-1").strip()
            if value[: len(_BEARER_PREFIX)].lower() != _BEARER_PREFIX:
                return None
            token = value[len(_BEARER_PREFIX):].strip()
            return token or None
    return None

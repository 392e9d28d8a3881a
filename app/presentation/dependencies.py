"""FastAPI dependency injection setup.

This module is the COMPOSITION ROOT - where we wire up dependencies.

In Clean Architecture, the composition root:
1. Lives in the outermost layer (presentation/infrastructure)
2. Creates concrete implementations
3. Injects them into abstractions
4. Never imported by inner layers

This is where we decide:
- Use Argon2CredentialHasher (pwdlib) for passwords
- Use signed JWTs for session tokens
- Use UnitOfWork with SQLAlchemy for the account store
- Use SMTP or the console for outgoing mail (EMAIL_BACKEND)

All these decisions are isolated here. The application layer doesn't know
or care about these choices - it only knows about interfaces.
"""

import logging

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from app.application.exceptions import UnauthorizedError
from app.application.services.auth_service import AuthService
from app.domain.repositories.unit_of_work import IUnitOfWork
from app.domain.services.credential_hasher import ICredentialHasher
from app.domain.services.expiry_policy import ExpiryPolicy
from app.domain.services.notifier import INotifier
from app.domain.services.opaque_token_generator import IOpaqueTokenGenerator
from app.domain.services.session_token_service import ISessionTokenService
from app.infrastructure.config.settings import Settings, get_settings
from app.infrastructure.email.console_notifier import ConsoleNotifier
from app.infrastructure.email.smtp_notifier import SmtpNotifier
from app.infrastructure.email.templates import AccountEmailTemplates
from app.infrastructure.persistence.database import (
    create_database_engine,
    create_session_factory,
)
from app.infrastructure.repositories.unit_of_work_impl import UnitOfWork
from app.infrastructure.security.argon2_credential_hasher import Argon2CredentialHasher
from app.infrastructure.security.jwt_session_token_service import JWTSessionTokenService
from app.infrastructure.security.opaque_token_generator import SecureOpaqueTokenGenerator

logger = logging.getLogger(__name__)


# Module-level singletons (created once, reused throughout app lifecycle)
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker | None = None
_credential_hasher: ICredentialHasher | None = None
_notifier: INotifier | None = None


def get_database_engine(settings: Settings = Depends(get_settings)) -> AsyncEngine:
    """Get or create database engine singleton.

    Args:
        settings: Application settings (injected)

    Returns:
        AsyncEngine instance
    """
    global _engine
    if _engine is None:
        _engine = create_database_engine(settings)
    return _engine


def get_session_factory(
    engine: AsyncEngine = Depends(get_database_engine),
) -> async_sessionmaker:
    """Get or create session factory singleton."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(engine)
    return _session_factory


def get_credential_hasher(settings: Settings = Depends(get_settings)) -> ICredentialHasher:
    """
    Dependency that provides the credential hasher.

    This is a SINGLETON - hashers are stateless and thread-safe.

    Note:
        In tests, this dependency can be overridden with FakePasswordHasher:

        app.dependency_overrides[get_credential_hasher] = lambda: FakePasswordHasher()
    """
    global _credential_hasher
    if _credential_hasher is None:
        _credential_hasher = Argon2CredentialHasher(
            time_cost=settings.argon2_time_cost,
            memory_cost=settings.argon2_memory_cost,
            parallelism=settings.argon2_parallelism,
        )
    return _credential_hasher


def get_token_generator() -> IOpaqueTokenGenerator:
    return SecureOpaqueTokenGenerator()


def get_expiry_policy() -> ExpiryPolicy:
    """Wall-clock expiry policy; tests override it with a controllable clock."""
    return ExpiryPolicy()


def build_notifier(settings: Settings) -> INotifier:
    """Create the notifier selected by EMAIL_BACKEND."""
    templates = AccountEmailTemplates(settings.frontend_url)
    if settings.email_backend == "console":
        return ConsoleNotifier(
            templates=templates,
            verification_token_hours=settings.verification_token_expire_hours,
            reset_token_hours=settings.password_reset_token_expire_hours,
        )

    return SmtpNotifier(
        templates=templates,
        host=settings.smtp_host,
        port=settings.smtp_port,
        sender=settings.email_sender,
        username=settings.smtp_user,
        password=settings.smtp_password,
        use_tls=settings.smtp_use_tls,
        use_ssl=settings.smtp_use_ssl,
        timeout=settings.smtp_timeout_seconds,
        verification_token_hours=settings.verification_token_expire_hours,
        reset_token_hours=settings.password_reset_token_expire_hours,
    )


def get_notifier(settings: Settings = Depends(get_settings)) -> INotifier:
    """Get or create the notifier singleton."""
    global _notifier
    if _notifier is None:
        _notifier = build_notifier(settings)
        logger.info(f"Email backend: {settings.email_backend}")
    return _notifier


def build_session_token_service(settings: Settings) -> ISessionTokenService:
    """Create the session token service (shared by login and the request gate)."""
    return JWTSessionTokenService(
        secret_key=settings.secret_key,
        algorithm=settings.algorithm,
        expire_days=settings.session_token_expire_days,
    )


def get_session_token_service(
    settings: Settings = Depends(get_settings),
) -> ISessionTokenService:
    return build_session_token_service(settings)


def get_auth_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    credential_hasher: ICredentialHasher = Depends(get_credential_hasher),
    token_generator: IOpaqueTokenGenerator = Depends(get_token_generator),
    session_token_service: ISessionTokenService = Depends(get_session_token_service),
    notifier: INotifier = Depends(get_notifier),
    expiry_policy: ExpiryPolicy = Depends(get_expiry_policy),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    """
    Dependency that provides AuthService.

    The service receives:
    1. UoW factory for database access
    2. Credential hasher and opaque token generator
    3. Session token service for login
    4. Notifier for verification, reset and welcome emails
    5. Expiry policy and token lifetimes from settings

    Dependency Graph:
        FastAPI endpoint
            → get_auth_service()
                → get_session_factory() → get_database_engine() → Settings
                → get_credential_hasher() → Argon2CredentialHasher
                → get_session_token_service() → JWTSessionTokenService
                → get_notifier() → SmtpNotifier | ConsoleNotifier
    """

    def uow_factory() -> IUnitOfWork:
        return UnitOfWork(session_factory)

    return AuthService(
        uow_factory=uow_factory,
        credential_hasher=credential_hasher,
        token_generator=token_generator,
        session_token_service=session_token_service,
        notifier=notifier,
        expiry_policy=expiry_policy,
        verification_token_hours=settings.verification_token_expire_hours,
        reset_token_hours=settings.password_reset_token_expire_hours,
    )


def get_current_account_id(request: Request) -> int:
    """
    Read the account id placed on the request by SessionGateMiddleware.

    Usage in endpoints:
        @router.get("/me")
        async def get_me(account_id: int = Depends(get_current_account_id)):
            ...

    Raises:
        UnauthorizedError: If the route is not behind the gate
    """
    account_id = getattr(request.state, "account_id", None)
    if account_id is None:
        raise UnauthorizedError()
    return account_id

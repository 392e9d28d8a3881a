"""Authentication service - application layer business logic.

This service orchestrates the account lifecycle use cases:
1. Registration (account creation + verification email)
2. Email verification (single-use token consumption + welcome email)
3. Login (credential check + session token issuance)
4. Forgot / reset password (single-use reset token)

DEPENDENCY INVERSION in action:
- AuthService depends on ICredentialHasher, ISessionTokenService,
  IOpaqueTokenGenerator, INotifier and IUnitOfWork (abstractions)
- No dependencies on PyJWT, pwdlib, SQLAlchemy or SMTP
"""

import logging
import secrets
import weakref
from collections.abc import Awaitable, Callable

from app.application.dtos.account_dto import AccountDTO
from app.application.dtos.auth_dto import LoginDTO, LoginResultDTO, RegisterDTO
from app.application.exceptions.exceptions import (
    AccountNotFoundError,
    DuplicateEmailError,
    EmailNotVerifiedError,
    InvalidCredentialsError,
    TokenExpiredError,
    TokenNotFoundError,
    ValidationFailedError,
)
from app.domain.entities.account import Account, normalize_email
from app.domain.exceptions import DuplicateAccountException
from app.domain.repositories.unit_of_work import IUnitOfWork
from app.domain.services.credential_hasher import ICredentialHasher
from app.domain.services.expiry_policy import ExpiryPolicy
from app.domain.services.notifier import INotifier, NotificationResult
from app.domain.services.opaque_token_generator import IOpaqueTokenGenerator
from app.domain.services.password_policy import password_policy_violations
from app.domain.services.session_token_service import ISessionTokenService

logger = logging.getLogger(__name__)

# One throwaway stored form per hasher, checked against on unknown-email logins
_dummy_hashes: "weakref.WeakKeyDictionary[ICredentialHasher, str]" = weakref.WeakKeyDictionary()


def _dummy_hash_for(hasher: ICredentialHasher) -> str:
    if hasher not in _dummy_hashes:
        _dummy_hashes[hasher] = hasher.hash(secrets.token_urlsafe(16))
    return _dummy_hashes[hasher]


class AuthService:
    """
    Authentication service encapsulating the account lifecycle.

    Every workflow runs to completion inside one request. Durable state lives
    in the account store only; notifications are a best-effort side channel
    whose failures are logged and never undo a committed change.

    Testing:
    - Unit tests use FakeUnitOfWork, FakePasswordHasher,
      FakeSessionTokenService and ConsoleNotifier (or FailingNotifier)
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        credential_hasher: ICredentialHasher,
        token_generator: IOpaqueTokenGenerator,
        session_token_service: ISessionTokenService,
        notifier: INotifier,
        expiry_policy: ExpiryPolicy,
        verification_token_hours: float = 24,
        reset_token_hours: float = 1,
    ):
        """
        Initialize auth service with dependencies.

        Args:
            uow_factory: Factory function that returns IUnitOfWork instances
            credential_hasher: Password hashing service (abstraction)
            token_generator: Source of opaque verification/reset tokens
            session_token_service: Session token issuance/validation
            notifier: Email side channel (verification, reset, welcome)
            expiry_policy: Clock-aware expiry computations
            verification_token_hours: Lifetime of email verification tokens
            reset_token_hours: Lifetime of password reset tokens
        """
        self._uow_factory = uow_factory
        self._credential_hasher = credential_hasher
        self._token_generator = token_generator
        self._session_token_service = session_token_service
        self._notifier = notifier
        self._expiry_policy = expiry_policy
        self._verification_token_hours = verification_token_hours
        self._reset_token_hours = reset_token_hours
        self._dummy_hash = _dummy_hash_for(credential_hasher)

    async def register(self, dto: RegisterDTO) -> AccountDTO:
        """
        Create an unverified account and mail its verification link.

        Business rules:
        1. Email must be unique
        2. Password is stored hashed
        3. A 24h verification token is attached at creation
        4. A failed verification email does not fail registration

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        async with self._uow_factory() as uow:
            if await uow.accounts.email_exists(dto.email):
                raise DuplicateEmailError()

            account = Account(
                email=dto.email,
                password_hash=self._credential_hasher.hash(dto.password),
                display_name=dto.display_name,
            )
            account.start_email_verification(
                self._token_generator.generate(),
                self._expiry_policy.expiry_time(self._verification_token_hours),
            )

            try:
                created = await uow.accounts.add(account)
            except DuplicateAccountException as exc:
                # Lost a race against a concurrent registration of the same email
                raise DuplicateEmailError() from exc

            await uow.commit()

        logger.info(f"Registered account {created.id}, verification pending")

        assert created.email_verification_token is not None
        await self._notify(
            "verification",
            created,
            self._notifier.send_verification(created, created.email_verification_token),
        )

        return AccountDTO.from_entity(created)

    async def verify_email(self, token: str) -> None:
        """
        Consume an email verification token.

        An expired token is cleared when detected, so replaying it later
        reports TokenNotFoundError rather than TokenExpiredError.

        Raises:
            TokenNotFoundError: If no account holds the token (or it was just consumed)
            TokenExpiredError: If the token's validity window has passed
        """
        if not token:
            raise TokenNotFoundError("Invalid verification token")

        async with self._uow_factory() as uow:
            account = await uow.accounts.get_by_verification_token(token)

            if account is None:
                raise TokenNotFoundError("Invalid verification token")

            if self._expiry_policy.is_expired(account.email_verification_expires):
                account.clear_email_verification()
                await uow.accounts.claim_verification_token(account, token)
                await uow.commit()
                logger.info(f"Expired verification token cleared for account {account.id}")
                raise TokenExpiredError("Verification token has expired")

            account.mark_email_verified()

            if not await uow.accounts.claim_verification_token(account, token):
                raise TokenNotFoundError("Invalid verification token")

            await uow.commit()

        logger.info(f"Email verified for account {account.id}")

        await self._notify("welcome", account, self._notifier.send_welcome(account))

    async def login(self, dto: LoginDTO) -> LoginResultDTO:
        """
        Authenticate with email and password and issue a session token.

        Unknown email and wrong password are indistinguishable to the caller,
        in both body and hashing cost.
        The verification check runs only after the password matched, so the
        verification state of an account is never revealed to someone
        without its password.

        Raises:
            InvalidCredentialsError: If email is unknown or password is wrong
            EmailNotVerifiedError: If the credentials are right but email is unverified
        """
        async with self._uow_factory() as uow:
            account = await uow.accounts.get_by_email(dto.email)

        if account is None:
            # Same hashing work as a wrong password, so response time does not reveal the email
            self._credential_hasher.verify(dto.password, self._dummy_hash)
            logger.info("Login failed: no account for submitted email")
            raise InvalidCredentialsError()

        if not self._credential_hasher.verify(dto.password, account.password_hash):
            logger.info(f"Login failed for account {account.id}: wrong password")
            raise InvalidCredentialsError()

        if not account.email_verified:
            logger.info(f"Login refused for account {account.id}: email not verified")
            raise EmailNotVerifiedError()

        # account.id is guaranteed non-None since we fetched from the store
        assert account.id is not None
        token = self._session_token_service.issue(account.id)

        logger.info(f"Session issued for account {account.id}")

        return LoginResultDTO(
            token=token,
            token_type="bearer",
            expires_in=self._session_token_service.lifetime_seconds,
            account=AccountDTO.from_entity(account),
        )

    async def forgot_password(self, email: str) -> None:
        """
        Start a password reset if an account exists for the email.

        Returns normally in both branches; callers must answer identically
        whether or not the account exists.
        """
        async with self._uow_factory() as uow:
            account = await uow.accounts.get_by_email(normalize_email(email))

            if account is None:
                logger.info("Password reset requested for unknown email")
                return

            account.start_password_reset(
                self._token_generator.generate(),
                self._expiry_policy.expiry_time(self._reset_token_hours),
            )
            account = await uow.accounts.update(account)
            await uow.commit()

        logger.info(f"Password reset token issued for account {account.id}")

        assert account.password_reset_token is not None
        await self._notify(
            "password reset",
            account,
            self._notifier.send_password_reset(account, account.password_reset_token),
        )

    async def reset_password(self, token: str, new_password: str) -> None:
        """
        Consume a password reset token and store the new credential.

        Raises:
            ValidationFailedError: If the new password violates the strength policy
            TokenNotFoundError: If no account holds the token (or it was just consumed)
            TokenExpiredError: If the token's validity window has passed
        """
        violations = password_policy_violations(new_password)
        if violations:
            raise ValidationFailedError(details={"password": violations})

        if not token:
            raise TokenNotFoundError("Invalid password reset token")

        async with self._uow_factory() as uow:
            account = await uow.accounts.get_by_reset_token(token)

            if account is None:
                raise TokenNotFoundError("Invalid password reset token")

            if self._expiry_policy.is_expired(account.password_reset_expires):
                account.clear_password_reset()
                await uow.accounts.claim_reset_token(account, token)
                await uow.commit()
                logger.info(f"Expired reset token cleared for account {account.id}")
                raise TokenExpiredError("Password reset token has expired")

            account.change_password(self._credential_hasher.hash(new_password))

            if not await uow.accounts.claim_reset_token(account, token):
                raise TokenNotFoundError("Invalid password reset token")

            await uow.commit()

        logger.info(f"Password reset completed for account {account.id}")

    async def get_account(self, account_id: int) -> AccountDTO:
        """
        Load the summary of an authenticated account.

        Raises:
            AccountNotFoundError: If the account no longer exists
        """
        async with self._uow_factory() as uow:
            account = await uow.accounts.get_by_id(account_id)

        if account is None:
            raise AccountNotFoundError(f"Account {account_id} not found")

        return AccountDTO.from_entity(account)

    async def _notify(
        self,
        kind: str,
        account: Account,
        send: Awaitable[NotificationResult],
    ) -> None:
        """Await a notification, logging failures without propagating them."""
        try:
            result = await send
        except Exception:
            logger.warning(
                f"Sending {kind} email for account {account.id} raised", exc_info=True
            )
            return

        if not result.delivered:
            logger.warning(
                f"Failed to send {kind} email for account {account.id}: {result.error}"
            )

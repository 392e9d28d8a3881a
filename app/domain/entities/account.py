"""Account domain entity - pure business logic, no infrastructure."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from app.domain.exceptions import BusinessRuleViolationException, InvalidEntityStateException


def normalize_email(email: str) -> str:
    """Return the canonical (stripped, lower-cased) form of an email address."""
    return email.strip().lower()


@dataclass
class Account:
    """
    Account domain entity representing a registered Kinote user.

    An account moves from PendingVerification to Verified exactly once.
    Independently, a live password reset token may be attached to it.
    Each token travels with its expiry: both are set or both are None.
    """

    email: str
    password_hash: str
    display_name: Optional[str] = None
    email_verified: bool = False
    email_verification_token: Optional[str] = None
    email_verification_expires: Optional[datetime] = None
    password_reset_token: Optional[str] = None
    password_reset_expires: Optional[datetime] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """
        Validate entity invariants at construction time.

        These are structural validations - they ensure the entity can exist
        in a valid state. Violations indicate the entity cannot be created.
        """
        if not self.email or "@" not in self.email:
            raise InvalidEntityStateException(
                "Invalid email address. Email must contain '@' symbol."
            )

        self.email = normalize_email(self.email)

        if not self.password_hash:
            raise InvalidEntityStateException(
                "Password hash is required. Account cannot exist without credentials."
            )

        if (self.email_verification_token is None) != (self.email_verification_expires is None):
            raise InvalidEntityStateException(
                "Email verification token and its expiry must be set together."
            )

        if (self.password_reset_token is None) != (self.password_reset_expires is None):
            raise InvalidEntityStateException(
                "Password reset token and its expiry must be set together."
            )

    @property
    def has_pending_verification(self) -> bool:
        return self.email_verification_token is not None

    @property
    def has_pending_password_reset(self) -> bool:
        return self.password_reset_token is not None

    def start_email_verification(self, token: str, expires_at: datetime) -> None:
        """
        Attach a fresh verification token to an unverified account.

        Raises:
            BusinessRuleViolationException: If the account is already verified
        """
        if self.email_verified:
            raise BusinessRuleViolationException("Email address is already verified.")
        if not token:
            raise BusinessRuleViolationException("Verification token cannot be empty.")

        self.email_verification_token = token
        self.email_verification_expires = expires_at
        self._touch()

    def mark_email_verified(self) -> None:
        """
        Complete verification and consume the verification token.

        Raises:
            BusinessRuleViolationException: If there is no pending verification
        """
        if not self.has_pending_verification:
            raise BusinessRuleViolationException("No pending email verification.")

        self.email_verified = True
        self.clear_email_verification()

    def clear_email_verification(self) -> None:
        self.email_verification_token = None
        self.email_verification_expires = None
        self._touch()

    def start_password_reset(self, token: str, expires_at: datetime) -> None:
        """Attach a reset token, replacing any previous one."""
        if not token:
            raise BusinessRuleViolationException("Password reset token cannot be empty.")

        self.password_reset_token = token
        self.password_reset_expires = expires_at
        self._touch()

    def change_password(self, new_password_hash: str) -> None:
        """
        Replace the stored credential and consume the reset token.

        Raises:
            BusinessRuleViolationException: If the new hash is empty
        """
        if not new_password_hash:
            raise BusinessRuleViolationException("Password hash cannot be empty.")

        self.password_hash = new_password_hash
        self.clear_password_reset()

    def clear_password_reset(self) -> None:
        self.password_reset_token = None
        self.password_reset_expires = None
        self._touch()

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)

"""Account ORM model - infrastructure layer SQLAlchemy mapping."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.entities.account import Account
from app.infrastructure.persistence.database import Base


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo; every timestamp in this table is written as UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AccountModel(Base):
    """
    SQLAlchemy ORM model for the accounts table.

    The unique constraints on both token columns are what guarantees that
    a mailed token can only ever resolve to one account.
    """

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Authentication
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    email_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    email_verification_token: Mapped[str | None] = mapped_column(
        String(128), unique=True, index=True, nullable=True
    )
    email_verification_expires: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    password_reset_token: Mapped[str | None] = mapped_column(
        String(128), unique=True, index=True, nullable=True
    )
    password_reset_expires: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation without credentials or tokens."""
        return f"AccountModel(id={self.id!r}, email={self.email!r}, verified={self.email_verified!r})"

    def to_entity(self) -> Account:
        """
        Convert ORM model to domain entity.

        Returns:
            Account domain entity
        """
        return Account(
            id=self.id,
            email=self.email,
            display_name=self.display_name,
            password_hash=self.password_hash,
            email_verified=self.email_verified,
            email_verification_token=self.email_verification_token,
            email_verification_expires=_as_utc(self.email_verification_expires),
            password_reset_token=self.password_reset_token,
            password_reset_expires=_as_utc(self.password_reset_expires),
            created_at=_as_utc(self.created_at),
            updated_at=_as_utc(self.updated_at),
        )

    @staticmethod
    def from_entity(account: Account) -> "AccountModel":
        """
        Create ORM model from domain entity.

        Args:
            account: Domain entity

        Returns:
            ORM model ready for persistence
        """
        model = AccountModel(**AccountModel.mutable_values(account))
        model.email = account.email

        if account.id is not None:
            model.id = account.id
        if account.created_at is not None:
            model.created_at = account.created_at

        return model

    @staticmethod
    def mutable_values(account: Account) -> dict[str, object]:
        """Column values a workflow may change after creation (email is immutable)."""
        return {
            "display_name": account.display_name,
            "password_hash": account.password_hash,
            "email_verified": account.email_verified,
            "email_verification_token": account.email_verification_token,
            "email_verification_expires": account.email_verification_expires,
            "password_reset_token": account.password_reset_token,
            "password_reset_expires": account.password_reset_expires,
        }

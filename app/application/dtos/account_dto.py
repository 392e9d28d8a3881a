"""Account DTOs for application layer using Pydantic."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.domain.entities.account import Account


class AccountDTO(BaseModel):
    """Sanitized account summary. Credentials and tokens never leave the service."""

    id: int
    email: str
    display_name: str | None = None
    email_verified: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_entity(cls, account: Account) -> "AccountDTO":
        """
        Convert a PERSISTED domain entity to DTO.

        Raises:
            ValueError: If the entity has not been saved yet (missing id or created_at)
        """
        if account.id is None or account.created_at is None:
            raise ValueError(
                "Cannot create AccountDTO from non-persisted entity. "
                "Ensure the entity has been saved via repository before converting to DTO."
            )

        return cls(
            id=account.id,
            email=account.email,
            display_name=account.display_name,
            email_verified=account.email_verified,
            created_at=account.created_at,
        )

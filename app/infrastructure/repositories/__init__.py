"""Repository implementations using SQLAlchemy."""

from app.infrastructure.repositories.account_repository_impl import AccountRepository
from app.infrastructure.repositories.unit_of_work_impl import UnitOfWork

__all__ = ["AccountRepository", "UnitOfWork"]

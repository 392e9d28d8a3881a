"""Domain exceptions - business rule violations."""

from app.domain.exceptions.domain_exceptions import (
    BusinessRuleViolationException,
    DomainException,
    DuplicateAccountException,
    InvalidEntityStateException,
)

__all__ = [
    "DomainException",
    "InvalidEntityStateException",
    "BusinessRuleViolationException",
    "DuplicateAccountException",
]

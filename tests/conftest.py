"""Pytest configuration and fixtures.

This file contains shared fixtures that can be used across all tests.

These fixtures follow the Dependency Inversion Principle:
- Use fake implementations (FakePasswordHasher, FakeUnitOfWork)
- Tests run fast (no real crypto, no database)
- Tests are isolated (each test gets fresh fakes)
"""

import os

# Settings are read when app.main is imported; give them a test configuration first
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-at-least-32-characters-long")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("EMAIL_BACKEND", "console")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./kinote-test.db")

from datetime import UTC, datetime, timedelta  # noqa: E402

import pytest  # noqa: E402

from app.application.services.auth_service import AuthService  # noqa: E402
from app.domain.entities.account import Account  # noqa: E402
from app.domain.services.expiry_policy import ExpiryPolicy  # noqa: E402
from app.domain.services.opaque_token_generator import IOpaqueTokenGenerator  # noqa: E402
from app.infrastructure.email.console_notifier import ConsoleNotifier  # noqa: E402
from app.infrastructure.email.templates import AccountEmailTemplates  # noqa: E402
from tests.fakes.password_hasher_fake import FakePasswordHasher  # noqa: E402
from tests.fakes.session_token_service_fake import FakeSessionTokenService  # noqa: E402
from tests.fakes.unit_of_work_fake import FakeUnitOfWork  # noqa: E402

FRONTEND_URL = "http://localhost:3000"


class ManualClock:
    """A clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime.now(UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class SequenceTokenGenerator(IOpaqueTokenGenerator):
    """Opaque token generator that hands out token-1, token-2, ..."""

    def __init__(self):
        self.count = 0

    def generate(self) -> str:
        self.count += 1
        return f"token-{self.count}"


@pytest.fixture
def fake_password_hasher() -> FakePasswordHasher:
    """
    Provide a FakePasswordHasher for tests.

    This fake hasher is fast and predictable, making tests easier to write.
    """
    return FakePasswordHasher()


@pytest.fixture
def fake_session_token_service() -> FakeSessionTokenService:
    return FakeSessionTokenService()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def expiry_policy(clock) -> ExpiryPolicy:
    return ExpiryPolicy(clock=clock)


@pytest.fixture
def token_generator() -> SequenceTokenGenerator:
    return SequenceTokenGenerator()


@pytest.fixture
def console_notifier() -> ConsoleNotifier:
    """Notifier that records every message in memory."""
    return ConsoleNotifier(templates=AccountEmailTemplates(FRONTEND_URL))


@pytest.fixture
def verified_account() -> Account:
    """
    A verified account; password_hash uses the FakePasswordHasher format,
    so its password is "Passw0rd".
    """
    return Account(
        id=1,
        email="test@example.com",
        display_name="Test User",
        password_hash="HASHED:Passw0rd",
        email_verified=True,
        created_at=datetime.now(UTC),
        updated_at=datetime.now(UTC),
    )


@pytest.fixture
def fake_uow():
    """
    Provide a fresh FakeUnitOfWork for each test.

    This ensures tests are isolated and don't affect each other.
    """
    return FakeUnitOfWork()


@pytest.fixture
def auth_service(
    fake_uow,
    fake_password_hasher,
    token_generator,
    fake_session_token_service,
    console_notifier,
    expiry_policy,
) -> AuthService:
    """
    Provide an AuthService instance with fake dependencies.

    - No database (FakeUnitOfWork)
    - No real crypto (FakePasswordHasher, FakeSessionTokenService)
    - No mail (ConsoleNotifier records messages)
    - A manual clock for expiry
    """

    def uow_factory():
        return fake_uow

    return AuthService(
        uow_factory=uow_factory,
        credential_hasher=fake_password_hasher,
        token_generator=token_generator,
        session_token_service=fake_session_token_service,
        notifier=console_notifier,
        expiry_policy=expiry_policy,
    )

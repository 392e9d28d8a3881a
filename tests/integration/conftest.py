"""Integration test fixtures.

Provides a real FastAPI app over a file-backed SQLite database. The app
talks to it through aiosqlite; tests read the store through a synchronous
engine on the same file (test-only access, e.g. to capture mailed tokens).
"""

from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import Engine, create_engine, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

from app.infrastructure.config.settings import get_settings
from app.infrastructure.email.console_notifier import ConsoleNotifier
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.account_model import AccountModel
from app.infrastructure.security.argon2_credential_hasher import Argon2CredentialHasher
from app.main import create_app
from app.presentation.dependencies import (
    get_credential_hasher,
    get_expiry_policy,
    get_notifier,
    get_session_factory,
)


class AccountStore:
    """Synchronous, test-only view of the accounts table."""

    def __init__(self, engine: Engine):
        self._engine = engine

    def get(self, email: str) -> AccountModel | None:
        with Session(self._engine) as session:
            return session.scalars(
                select(AccountModel).where(AccountModel.email == email)
            ).one_or_none()

    def count(self) -> int:
        with Session(self._engine) as session:
            return len(session.scalars(select(AccountModel.id)).all())


@pytest.fixture
def database_path(tmp_path: Path) -> Path:
    return tmp_path / "kinote.db"


@pytest.fixture
def sync_engine(database_path: Path) -> Generator[Engine]:
    engine = create_engine(f"sqlite:///{database_path}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(sync_engine: Engine) -> AccountStore:
    return AccountStore(sync_engine)


@pytest.fixture
def app(
    database_path: Path,
    sync_engine: Engine,
    console_notifier: ConsoleNotifier,
    expiry_policy,
) -> Generator[FastAPI]:
    """
    Create the application with test overrides.

    - Session factory bound to the per-test SQLite file
    - Console notifier that records mails in memory
    - Expiry policy driven by the manual clock fixture
    - Cheap Argon2 parameters
    """
    app = create_app(get_settings())

    # NullPool: no pooled aiosqlite connection outlives the test
    engine = create_async_engine(f"sqlite+aiosqlite:///{database_path}", poolclass=NullPool)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    hasher = Argon2CredentialHasher(time_cost=1, memory_cost=1024, parallelism=1)

    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_notifier] = lambda: console_notifier
    app.dependency_overrides[get_expiry_policy] = lambda: expiry_policy
    app.dependency_overrides[get_credential_hasher] = lambda: hasher

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient]:
    """FastAPI test client over the real application."""
    with TestClient(app) as test_client:
        yield test_client

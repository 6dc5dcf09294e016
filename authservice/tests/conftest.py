from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path

import pytest

_TMP = Path(tempfile.mkdtemp(prefix="authservice-tests-"))

# configuration is read once at import time, so it must be in place first
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP / 'test.db'}"
os.environ["LOG_FILE"] = str(_TMP / "app.log")
os.environ["SECRET_KEY"] = "test-signing-key-0123456789abcdef0123456789abcdef"

from authservice.application.services.credentials import CredentialService  # noqa: E402
from authservice.domain.users.entities import User  # noqa: E402
from authservice.domain.users.exceptions import UserAlreadyExistsError  # noqa: E402
from authservice.domain.users.repositories import (  # noqa: E402
    PasswordHasher,
    RevokedTokenRepository,
    UserRepository,
)
from authservice.infrastructure.auth.jwt_tokens import JwtTokenCodec  # noqa: E402

TEST_SECRET = os.environ["SECRET_KEY"]


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def create(self, email: str, password_hash: str) -> User:
        if self.find_by_email(email) is not None:
            raise UserAlreadyExistsError()
        user = User(
            id=self._seq,
            email=email,
            password_hash=password_hash,
            created_at=datetime.now(UTC),
        )
        self._seq += 1
        self._users[user.id] = user
        return user

    def list_all(self) -> list[User]:
        return [self._users[key] for key in sorted(self._users)]

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def delete_by_id(self, user_id: int) -> User | None:
        return self._users.pop(user_id, None)


class InMemoryRevokedTokenRepository(RevokedTokenRepository):
    def __init__(self) -> None:
        self.entries: dict[str, datetime] = {}

    def add(self, token_hash: str, user_id: int, expires_at: datetime) -> None:
        self.entries.setdefault(token_hash, expires_at)

    def contains(self, token_hash: str) -> bool:
        return token_hash in self.entries

    def purge_expired(self, now: datetime) -> int:
        expired = [key for key, exp in self.entries.items() if exp <= now]
        for key in expired:
            del self.entries[key]
        return len(expired)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def revoked() -> InMemoryRevokedTokenRepository:
    return InMemoryRevokedTokenRepository()


@pytest.fixture()
def credentials(revoked: InMemoryRevokedTokenRepository) -> CredentialService:
    return CredentialService(
        password_hasher=DeterministicHasher(),
        codec=JwtTokenCodec(secret=TEST_SECRET),
        revoked=revoked,
    )


@pytest.fixture()
def reset_database() -> Iterator[None]:
    from authservice.infrastructure.db import ENGINE, Base
    from authservice.infrastructure.db import models  # noqa: F401

    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    yield
    Base.metadata.drop_all(bind=ENGINE)

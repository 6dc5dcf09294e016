# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from authservice.domain.users.entities import User as DomainUser
from authservice.domain.users.exceptions import UserAlreadyExistsError
from authservice.domain.users.repositories import RevokedTokenRepository, UserRepository
from authservice.infrastructure.db.models import RevokedToken, User
from authservice.infrastructure.unit_of_work import unit_of_work_scope
from authservice.shared.logging import logger


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        created_at=_as_utc(row.created_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def create(self, email: str, password_hash: str) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(email=email, password_hash=password_hash)
                session.add(row)
                session.flush()
                user = _to_domain(row)
        except IntegrityError as exc:
            logger.info("users.create: unique constraint rejected duplicate email")
            raise UserAlreadyExistsError() from exc
        return user

    def list_all(self) -> list[DomainUser]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = session.scalars(select(User).order_by(User.id.asc())).all()
            return [_to_domain(row) for row in rows]

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def find_by_email(self, email: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(select(User).where(User.email == email)).first()
            return _to_domain(row) if row else None

    def delete_by_id(self, user_id: int) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            if row is None:
                return None
            user = _to_domain(row)
            session.delete(row)
        return user


class SqlAlchemyRevokedTokenRepository(RevokedTokenRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def add(self, token_hash: str, user_id: int, expires_at: datetime) -> None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                if session.get(RevokedToken, token_hash) is not None:
                    return
                session.add(
                    RevokedToken(token_hash=token_hash, user_id=user_id, expires_at=expires_at)
                )
        except IntegrityError:
            # a concurrent logout revoked the same token first
            logger.debug("revoked_tokens.add: already present")

    def contains(self, token_hash: str) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            return session.get(RevokedToken, token_hash) is not None

    def purge_expired(self, now: datetime) -> int:
        with unit_of_work_scope(self._session_factory) as session:
            result = session.execute(delete(RevokedToken).where(RevokedToken.expires_at <= now))
            return int(result.rowcount or 0)

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import SessionToken, User


class UserRepository(Protocol):
    def create(self, email: str, password_hash: str) -> User: ...
    def list_all(self) -> list[User]: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def find_by_email(self, email: str) -> User | None: ...
    def delete_by_id(self, user_id: int) -> User | None: ...


class RevokedTokenRepository(Protocol):
    def add(self, token_hash: str, user_id: int, expires_at: datetime) -> None: ...
    def contains(self, token_hash: str) -> bool: ...
    def purge_expired(self, now: datetime) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenCodec(Protocol):
    def encode(self, user_id: int) -> SessionToken: ...
    def decode(self, token: str) -> SessionToken: ...

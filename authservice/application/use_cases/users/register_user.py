# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authservice.application.services.credentials import CredentialService
from authservice.domain.users.entities import User
from authservice.domain.users.exceptions import UserAlreadyExistsError
from authservice.domain.users.repositories import UserRepository


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        credentials: CredentialService,
    ) -> None:
        self._users = users
        self._credentials = credentials

    def execute(self, email: str, password: str) -> tuple[User, str]:
        existing = self._users.find_by_email(email)
        if existing:
            raise UserAlreadyExistsError()
        hashed = self._credentials.hash(password)
        persisted = self._users.create(email, hashed)
        token = self._credentials.issue_token(persisted.id)
        return persisted, token.token

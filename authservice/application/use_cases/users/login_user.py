# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authservice.application.services.credentials import CredentialService
from authservice.domain.users.exceptions import InvalidCredentialsError
from authservice.domain.users.repositories import UserRepository


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        credentials: CredentialService,
    ) -> None:
        self._users = users
        self._credentials = credentials

    def execute(self, email: str, password: str) -> str:
        user = self._users.find_by_email(email)
        if user is None or not self._credentials.verify(password, user.password_hash):
            raise InvalidCredentialsError()

        return self._credentials.issue_token(user.id).token

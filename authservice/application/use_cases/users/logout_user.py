# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Use-case for revoking access tokens."""

from __future__ import annotations

from authservice.application.services.credentials import CredentialService


class LogoutUserUseCase:
    def __init__(self, *, credentials: CredentialService) -> None:
        self._credentials = credentials

    def execute(self, token: str) -> None:
        if token:
            self._credentials.revoke(token)

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bearer-token guard for protected endpoints."""

from __future__ import annotations

from functools import wraps

from flask import g, request

from authservice.application.services.credentials import CredentialService
from authservice.domain.users.exceptions import InvalidTokenError
from authservice.domain.users.repositories import UserRepository
from authservice.shared.logging import logger


def extract_bearer_token(header: str | None) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header.

    Raises ``InvalidTokenError`` when the header is missing or malformed.
    """

    scheme, _, token = (header or "").strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token or " " in token:
        raise InvalidTokenError(context={"reason": "missing_bearer_token"})
    return token


class BearerAuthGuard:
    def __init__(self, *, credentials: CredentialService, users: UserRepository) -> None:
        self._credentials = credentials
        self._users = users

    def __call__(self, view):
        @wraps(view)
        def inner(*a, **kw):
            try:
                token = extract_bearer_token(request.headers.get("Authorization"))
                user_id = self._credentials.validate_token(token)
            except InvalidTokenError:
                logger.warning(f"Auth failed on {request.method} {request.path}")
                raise

            if self._users.find_by_id(user_id) is None:
                logger.warning(
                    f"Auth failed (user gone) user={user_id} on {request.method} {request.path}"
                )
                raise InvalidTokenError(context={"reason": "unknown_user"})

            g.user_id = user_id
            g.auth_token = token
            logger.debug(f"Auth OK: user={user_id} {request.method} {request.path}")
            return view(*a, **kw)

        return inner

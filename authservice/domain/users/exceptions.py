# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from authservice.shared.errors.base import DomainError


class UserAlreadyExistsError(DomainError):
    error_code = "user_already_exists"
    error_status = HTTPStatus.CONFLICT


class InvalidCredentialsError(DomainError):
    error_code = "invalid_credentials"
    error_status = HTTPStatus.UNAUTHORIZED


class InvalidTokenError(DomainError):
    error_code = "unauthorized"
    error_status = HTTPStatus.UNAUTHORIZED


class UserNotFoundError(DomainError):
    error_code = "user_not_found"
    error_status = HTTPStatus.NOT_FOUND

    def __init__(self, user_id: int) -> None:
        super().__init__(context={"user_id": user_id})

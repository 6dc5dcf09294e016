# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users.entities import SessionToken, User
from .users.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

__all__ = [
    "InvalidCredentialsError",
    "InvalidTokenError",
    "SessionToken",
    "User",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]

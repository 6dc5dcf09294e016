# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from authservice.domain.users.entities import User
from authservice.shared.errors.validation_types import ValidationErrorType

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _normalize_email(value: str) -> str:
    value = value.strip().lower()
    if not value:
        raise PydanticCustomError(
            ValidationErrorType.MISSING,
            "Email cannot be empty",
            {}
        )

    if len(value) > 254:
        raise PydanticCustomError(
            ValidationErrorType.EMAIL_TOO_LONG,
            "Email must be at most 254 characters",
            {"max_length": 254}
        )

    if not _EMAIL_RE.match(value):
        raise PydanticCustomError(
            ValidationErrorType.EMAIL_INVALID,
            "Email must look like name@example.com",
            {"pattern": _EMAIL_RE.pattern}
        )

    return value


class SignUpRequestDTO(BaseModel):
    email: str
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_BLANK,
                "Password cannot be blank",
                {}
            )
        return value


class LoginRequestDTO(BaseModel):
    email: str
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _normalize_email(value)


class TokenResponseDTO(BaseModel):
    token: str


class MessageResponseDTO(BaseModel):
    message: str


class UserResponseDTO(BaseModel):
    id: int
    email: str
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> UserResponseDTO:
        return cls(id=user.id, email=user.email, created_at=user.created_at)

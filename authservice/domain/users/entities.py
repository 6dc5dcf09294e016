# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:
    """Registered account as kept by the user store."""

    id: int
    email: str
    password_hash: str
    created_at: datetime


@dataclass(slots=True, frozen=True)
class SessionToken:
    """Signed access token together with the claims it carries."""

    user_id: int
    token: str
    expires_at: datetime
